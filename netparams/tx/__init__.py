"""
Transaction classes
"""
# tx/__init__.py
from netparams.tx.tx import *
