"""
Custom exceptions for the wave simulator.
"""


class WaveSimulatorError(Exception):
    """Base exception for wave simulator"""
    pass


class InvalidConstructionError(WaveSimulatorError):
    """Raised when an engine, instrument or config is built from bad inputs"""
    pass


class InsufficientFundsError(WaveSimulatorError):
    """Raised when attempting to buy with insufficient funds"""
    def __init__(self, required: float, available: float):
        self.required = required
        self.available = available
        super().__init__(f"Insufficient funds: need ${required:.2f}, have ${available:.2f}")


class UnknownInstrumentError(WaveSimulatorError):
    """Raised when a trade or lookup names an unregistered instrument"""
    def __init__(self, instrument: str):
        self.instrument = instrument
        super().__init__(f"Unknown instrument: {instrument}")


class UnknownHolderError(WaveSimulatorError):
    """Raised when a trade targets a holder without an account"""
    def __init__(self, holder_id: str):
        self.holder_id = holder_id
        super().__init__(f"Unknown holder: {holder_id}")


class MissingPriceError(WaveSimulatorError):
    """Raised when a valuation snapshot lacks a price for a held instrument"""
    def __init__(self, instrument: str):
        self.instrument = instrument
        super().__init__(f"No price for {instrument} in snapshot")


class InvalidTradeError(WaveSimulatorError):
    """Raised for invalid trade parameters"""
    pass


class LimitPriceError(InvalidTradeError):
    """Raised when the fill price is on the wrong side of a limit"""
    def __init__(self, instrument: str, price: float, limit_price: float):
        self.instrument = instrument
        self.price = price
        self.limit_price = limit_price
        super().__init__(
            f"Limit not met for {instrument}: price ${price:.2f}, limit ${limit_price:.2f}"
        )


class DataLoadingError(WaveSimulatorError):
    """Raised when data loading fails"""
    pass
