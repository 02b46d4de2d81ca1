"""
Error Handling for the APY Ops toolkit
Structured exceptions shared by the deployment helpers and scripts

Scripts let these propagate to the runner, which logs the code, message
and details and exits 1.
"""

import logging
import time
from typing import Callable, Dict, Optional, TypeVar
from functools import wraps
from enum import Enum

logger = logging.getLogger("Retry")


# ============================================
# ERROR CODES
# ============================================

class ErrorCode(str, Enum):
    # Bad input or missing setup
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Gas station, Etherscan
    EXTERNAL_API_ERROR = "EXTERNAL_API_ERROR"

    # Node and chain
    BLOCKCHAIN_ERROR = "BLOCKCHAIN_ERROR"
    TRANSACTION_FAILED = "TRANSACTION_FAILED"

    SCRIPT_ERROR = "SCRIPT_ERROR"


# ============================================
# CUSTOM EXCEPTIONS
# ============================================

class ToolkitError(Exception):
    """Base exception for the toolkit"""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SCRIPT_ERROR,
        details: Optional[Dict] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict:
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(ToolkitError):
    """Bad argument: amount, address, network, option"""
    def __init__(self, message: str, details: Dict = None):
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)


class NotFoundError(ToolkitError):
    """Lookup miss in the address book, a registry or the artifacts"""
    def __init__(self, resource: str, identifier: str = None):
        message = f"{resource} '{identifier}' not found" if identifier else f"{resource} not found"
        super().__init__(message, ErrorCode.NOT_FOUND, {"resource": resource, "identifier": identifier})


class ConfigurationError(ToolkitError):
    """Missing env var, RPC URL or unreachable node"""
    def __init__(self, message: str, setting: str = None):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, {"setting": setting} if setting else None)


class ExternalAPIError(ToolkitError):
    """Gas station or explorer request failed"""
    def __init__(self, api_name: str, status_code: int = None, message: str = None):
        details = {"api": api_name}
        if status_code:
            details["api_status_code"] = status_code
        super().__init__(message or f"{api_name} request failed", ErrorCode.EXTERNAL_API_ERROR, details)


class BlockchainError(ToolkitError):
    """Node rejected a call (RPC error response)"""
    def __init__(self, network: str, message: str, tx_hash: str = None):
        details = {"network": network}
        if tx_hash:
            details["tx_hash"] = tx_hash
        super().__init__(message, ErrorCode.BLOCKCHAIN_ERROR, details)


class TransactionFailedError(BlockchainError):
    """Transaction reverted, or was not mined in time"""
    def __init__(self, network: str, tx_hash: str, message: str = None, block_number: int = None):
        super().__init__(network, message or f"Transaction {tx_hash} failed", tx_hash)
        self.code = ErrorCode.TRANSACTION_FAILED
        self.tx_hash = tx_hash
        self.block_number = block_number
        if block_number is not None:
            self.details["block_number"] = block_number


# ============================================
# RETRY LOGIC
# ============================================

T = TypeVar('T')


def retry_sync(
    max_attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: tuple = (Exception,)
):
    """
    Retry a flaky read with exponential backoff, re-raising the last
    error once attempts run out.

    Usage:
        @retry_sync(max_attempts=3, delay=1.0, exceptions=(httpx.HTTPError,))
        def fetch_gas_price():
            ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            wait = delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_attempts:
                        logger.error(f"{func.__name__} failed after {max_attempts} attempts: {e}")
                        raise
                    logger.warning(f"{func.__name__} attempt {attempt}/{max_attempts} failed: {e}")
                    time.sleep(wait)
                    wait *= backoff

        return wrapper
    return decorator
