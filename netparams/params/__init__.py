"""
The chain-parameter registry

    select_params("regtest")
    params().default_port  # 29488

Profiles, genesis descriptors and checkpoint tables are built once at import; see registry.py for the selection
lifecycle and profile.py for the derivation order.
"""
# params/__init__.py
from netparams.params.checkpoints import *
from netparams.params.genesis import *
from netparams.params.modifiable import *
from netparams.params.profile import *
from netparams.params.registry import *
from netparams.params.seeds import *
