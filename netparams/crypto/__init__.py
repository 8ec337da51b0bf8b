"""
crypto folder used to house the hash functions the block and transaction ids are built on
"""

# crypto/__init__.py
from netparams.crypto.hash_functions import *
