"""
Block and BlockHeader classes
"""
# block/__init__.py
from netparams.block.block import *
