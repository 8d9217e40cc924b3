"""Request and response bodies for the quote service.

Account data travels as standard base64. Amounts are accepted as ints or
decimal strings and returned as decimal strings.
"""

from __future__ import annotations

from pydantic import Base64Bytes, BaseModel, Field

from quoter.models.quote import Quote, QuoteParams
from quoter.models.types import AccountKey, Amount, SwapMode
from quoter.snapshot.assembler import VenueAccounts


class VenueAccountsModel(BaseModel):
    """Which snapshot entry holds which venue account."""

    instr_header: AccountKey = Field(alias="instrHeader")
    a_token_state: AccountKey = Field(alias="aTokenState", description="Asset token state")
    b_token_state: AccountKey = Field(alias="bTokenState", description="Currency token state")
    community: AccountKey
    lines: AccountKey
    a_mint: AccountKey = Field(alias="aMint")
    b_mint: AccountKey = Field(alias="bMint")

    model_config = {"populate_by_name": True}

    def to_accounts(self) -> VenueAccounts:
        return VenueAccounts(
            instr_header=self.instr_header,
            a_token_state=self.a_token_state,
            b_token_state=self.b_token_state,
            community=self.community,
            lines=self.lines,
            a_mint=self.a_mint,
            b_mint=self.b_mint,
        )


class QuoteRequest(BaseModel):
    """A snapshot plus the swap to price against it."""

    accounts: VenueAccountsModel
    snapshot: dict[AccountKey, Base64Bytes] = Field(
        description="Raw account data keyed by account id, base64 encoded"
    )
    input_mint: AccountKey = Field(alias="inputMint")
    output_mint: AccountKey = Field(alias="outputMint")
    amount: Amount
    swap_mode: SwapMode = Field(default=SwapMode.EXACT_IN, alias="swapMode")

    model_config = {"populate_by_name": True}

    def to_params(self) -> QuoteParams:
        return QuoteParams(
            input_mint=self.input_mint,
            output_mint=self.output_mint,
            amount=self.amount,
            swap_mode=self.swap_mode,
        )


class QuoteResponse(BaseModel):
    """A computed quote."""

    in_amount: str = Field(alias="inAmount", description="Input consumed, decimal string")
    out_amount: str = Field(alias="outAmount", description="Output produced, decimal string")
    fee_amount: str = Field(alias="feeAmount", description="Fee in currency minor units")
    fee_mint: AccountKey = Field(alias="feeMint")
    fee_pct: str = Field(alias="feePct", description="Fee ratio as a decimal string")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_quote(cls, quote: Quote) -> QuoteResponse:
        return cls(
            in_amount=str(quote.in_amount),
            out_amount=str(quote.out_amount),
            fee_amount=str(quote.fee_amount),
            fee_mint=quote.fee_mint,
            fee_pct=str(quote.fee_pct),
        )


class ErrorResponse(BaseModel):
    """Typed quote failure."""

    error: str = Field(description="Error code, e.g. swap_failed")
    message: str


class HealthResponse(BaseModel):
    """Liveness report, naming the venue this process quotes."""

    status: str = "ok"
    version: str
    label: str
