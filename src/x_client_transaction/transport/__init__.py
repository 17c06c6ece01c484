from .http import HttpClient, HttpTransport

__all__ = ["HttpClient", "HttpTransport"]
