"""
The custom exceptions used throughout netparams

Every failure of the chain-parameter registry itself derives from ChainParamsError. They all signal a corrupted constant
table or a caller-contract defect and none of them are meant to be retried.
"""
__all__ = ["DataEncodingError", "WriteError", "ScriptNumError", "TargetBitsError",
           "MerkleError", "ChainParamsError", "GenesisMismatchError", "UnknownNetworkError", "NetworkNotSelectedError",
           "ParamsNotModifiableError", "CheckpointError", "AddressPrefixError"]


class DataEncodingError(Exception):
    """
    For use in encoding/decoding algorithms
    """
    pass


class WriteError(Exception):
    """
    For when writing data that would be otherwise out of bounds
    """
    pass


class ScriptNumError(Exception):
    """
    For use in the ScriptNum class
    """
    pass


class TargetBitsError(Exception):
    """
    For use in target bit encoding and decoding
    """
    pass


class MerkleError(Exception):
    """
    For use in the MerkleTree class
    """
    pass


# --- CHAIN PARAMETERS --- #

class ChainParamsError(Exception):
    """
    Parent class for every fatal chain-parameter condition
    """
    pass


class GenesisMismatchError(ChainParamsError):
    """
    Raised when a computed genesis hash or merkle root differs from the recorded value of its network
    """

    def __init__(self, network_id: str, field: str, expected: str, actual: str):
        self.network_id = network_id
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(f"genesis {field} mismatch for network {network_id}: expected {expected}, got {actual}")


class UnknownNetworkError(ChainParamsError):
    """
    For network identifiers outside of main, test, regtest and unittest
    """
    pass


class NetworkNotSelectedError(ChainParamsError):
    """
    Raised when the active profile is read before any network has been selected
    """
    pass


class ParamsNotModifiableError(ChainParamsError):
    """
    Raised when the modifiable capability is requested while unittest is not the active network
    """
    pass


class CheckpointError(ChainParamsError):
    """
    For checkpoint tables violating their ordering or timestamp invariants
    """
    pass


class AddressPrefixError(ChainParamsError):
    """
    For profiles where two address kinds share the same prefix bytes
    """
    pass
