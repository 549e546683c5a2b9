"""
OKpay domain layer: value objects, entities, results, exceptions and
the interfaces infrastructure adapters implement.
"""
