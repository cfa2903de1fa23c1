from metrycs.features.export.router import router

__all__ = ["router"]
