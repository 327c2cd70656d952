"""Engine-wide constants."""

# Fixed-point scale for spot prices (1e18)
PRICE_SCALE = 10**18

# Default fee tier: 0.3% taken from the input amount
DEFAULT_FEE_NUMERATOR = 997
DEFAULT_FEE_DENOMINATOR = 1000

# Account that holds pooled assets inside the asset ledger
POOL_CUSTODY_ACCOUNT = "pairswap:custody"
