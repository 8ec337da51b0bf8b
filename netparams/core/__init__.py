"""
Contains the core elements that are used within netparams

Core:
    -Provides the standard protocol for serializable elements
    -Provides the reference formats and protocol constants
    -Provides custom exceptions for chain parameters and encoding
"""
# core/__init__.py
from netparams.core.byte_stream import *
from netparams.core.exceptions import *
from netparams.core.formats import *
from netparams.core.serializable import *
