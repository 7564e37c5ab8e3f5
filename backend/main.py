"""
GCP Cloud Functions entrypoint. Exposes made_http and made_router_http for 2nd gen HTTP functions.
Set entry-point to main.made_http (or main.made_router_http) when deploying.
"""
from handlers.gcp_function import made_http, made_router_http

__all__ = ["made_http", "made_router_http"]
