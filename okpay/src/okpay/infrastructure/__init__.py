"""
OKpay infrastructure layer: HTTP clients, storage, caching, signing
channels and monitoring.
"""
