from social_authorize.app.factory import create_app

__all__ = ["create_app"]
