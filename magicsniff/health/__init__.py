from magicsniff.health.router import router


__all__ = ["router"]
