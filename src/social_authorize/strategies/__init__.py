from social_authorize.strategies.base import SingleSignOnStrategy
from social_authorize.strategies.google import GoogleStrategy

__all__ = ["GoogleStrategy", "SingleSignOnStrategy"]
