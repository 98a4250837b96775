"""
schemas/store_credits.py
-------------------------

Customer store credit balances and the transactions behind them.
"""

from __future__ import annotations

from typing import List, Optional

from vend_api.schemas.base import VendModel, VendRecord


class StoreCreditTransaction(VendModel):
    id: Optional[str] = None
    amount: Optional[float] = None
    type: Optional[str] = None
    notes: Optional[str] = None
    user_id: Optional[str] = None
    sale_id: Optional[str] = None
    client_id: Optional[str] = None
    created_at: Optional[str] = None


class StoreCredit(VendRecord):
    customer_id: Optional[str] = None
    created_at: Optional[str] = None
    customer: Optional[str] = None
    balance: Optional[float] = None
    total_credit_issued: Optional[float] = None
    total_credit_redeemed: Optional[float] = None
    store_credit_transactions: Optional[List[StoreCreditTransaction]] = None
