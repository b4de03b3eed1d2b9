# Fixed point scale factors
PRECISION = 10**18  # 1e18, internal USD and health factor precision
FEED_DECIMALS = 8  # Chainlink USD feeds report 8 decimals
ADDITIONAL_FEED_PRECISION = 10**10  # lifts an 8 decimal price to 1e18

# Word size
MAX_UINT256 = 2**256 - 1

# Solvency constants
LIQUIDATION_THRESHOLD = 50  # 50%, i.e. 200% over-collateralized
LIQUIDATION_PRECISION = 100
LIQUIDATION_BONUS = 10  # 10% of the covered collateral
MIN_HEALTH_FACTOR = PRECISION  # 1.0
MAX_HEALTH_FACTOR = MAX_UINT256  # reported for accounts without debt

# Oracle constants
ORACLE_TIMEOUT = 3 * 60 * 60  # 3 hours, only enforced when enabled

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
