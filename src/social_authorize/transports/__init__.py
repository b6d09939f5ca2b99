from social_authorize.transports.google import GoogleTransport

__all__ = ["GoogleTransport"]
