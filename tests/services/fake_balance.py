"""Fake Balance Source — scripted stand-in for the on-chain USDC reader.

Invariants:
    - Records every address it is asked for, in call order
    - `response` may be a number (returned), an exception (raised), or a callable (called)
"""


class FakeBalanceSource:
    """BalanceSource stand-in for context builder tests."""

    def __init__(self, response=0.0):
        self.response = response
        self.calls = []

    async def get_usdc_balance(self, address):
        self.calls.append(address)
        r = self.response
        if isinstance(r, BaseException):
            raise r
        return r() if callable(r) else r
