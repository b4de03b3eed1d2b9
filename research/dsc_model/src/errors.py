"""Custom errors for the DSC engine model"""

class ProtocolError(Exception):
    """Base error class for protocol errors"""
    pass

class CheckedArithmeticError(ProtocolError):
    """Error for unsigned underflow or uint256 overflow"""
    pass

class InvalidAmountError(ProtocolError):
    """Error for a zero or negative amount"""

    def __init__(self, amount: int):
        super().__init__(f"Amount must be more than zero, got {amount}")
        self.amount = amount

class AssetNotAcceptedError(ProtocolError):
    """Error for a collateral token that was never registered"""

    def __init__(self, token: str):
        super().__init__(f"Token not allowed as collateral: {token}")
        self.token = token

class ConfigurationMismatchError(ProtocolError):
    """Error for inconsistent token / price feed lists"""
    pass

class TransferFailedError(ProtocolError):
    """Error for an external token transfer that reported failure"""
    pass

class BreaksHealthFactorError(ProtocolError):
    """Error for an operation leaving the caller under-collateralized"""

    def __init__(self, health_factor: int):
        super().__init__(f"Health factor broken: {health_factor}")
        self.health_factor = health_factor

class MintFailedError(ProtocolError):
    """Error for a rejected stablecoin mint"""
    pass

class BurnFailedError(ProtocolError):
    """Error for a rejected stablecoin burn"""
    pass

class HealthFactorOkError(ProtocolError):
    """Error for liquidating a solvent position"""

    def __init__(self, health_factor: int):
        super().__init__(f"Health factor is ok: {health_factor}")
        self.health_factor = health_factor

class HealthFactorNotImprovedError(ProtocolError):
    """Error for a liquidation that did not improve the target"""

    def __init__(self, starting_health_factor: int, ending_health_factor: int):
        super().__init__(
            f"Health factor not improved: {starting_health_factor} -> {ending_health_factor}"
        )
        self.starting_health_factor = starting_health_factor
        self.ending_health_factor = ending_health_factor

class OracleUnavailableError(ProtocolError):
    """Error for invalid price data"""
    pass

class StalePriceError(OracleUnavailableError):
    """Error for a price older than the oracle timeout"""
    pass

class ReentrantCallError(ProtocolError):
    """Error for nested entry into a guarded operation"""
    pass

class StablecoinError(ProtocolError):
    """Base error for the stablecoin token"""
    pass

class MustBeMoreThanZeroError(StablecoinError):
    pass

class BurnAmountExceedsBalanceError(StablecoinError):
    pass

class NotZeroAddressError(StablecoinError):
    pass

class NotOwnerError(StablecoinError):
    pass
