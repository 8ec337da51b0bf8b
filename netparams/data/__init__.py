"""
All methods for manipulating and representing data in netparams
"""

# data/__init__.py
from netparams.data.merkle_trees import *
from netparams.data.target_bits import *
from netparams.data.uint256 import *
