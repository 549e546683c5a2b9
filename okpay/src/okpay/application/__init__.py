"""
Application layer: use cases, services and the payment session.
"""
