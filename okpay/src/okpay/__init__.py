"""
OKpay - Hive HBD payment requests.

Validates a recipient against the Hive account registry, converts fiat
amounts with cached daily exchange rates and hands the transfer to a
signing channel (extension, keychain deep link or HiveSigner).
"""

__version__ = "0.1.0"
