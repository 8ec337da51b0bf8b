"""
Script number encoding and the script builder used for the genesis coinbase
"""
# script/__init__.py
from netparams.script.script_builder import *
from netparams.script.script_num import *
