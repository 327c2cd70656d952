"""Share token accounting."""

from pairswap.tokens.share_token import ShareToken

__all__ = ["ShareToken"]
