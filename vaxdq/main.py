from vaxdq.api.main import app

__all__ = ["app"]
