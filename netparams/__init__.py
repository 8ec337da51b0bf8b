"""
netparams: the chain-parameter registry of the node

The registry holds one parameter profile per network (main, test, regtest, unittest) and a pointer to the one
selected for this process. Everything downstream (consensus, networking, RPC, mining) reads its constants through
netparams.params.params() after an explicit select_params() call.
"""
__version__ = "0.1.0"
