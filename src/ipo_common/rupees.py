"""Integer arithmetic utilities for rupee amounts.

All prices and amounts are whole rupees held as int. No float, no Decimal:
IPO price bands are integral, so every admissible bid price is too.
"""


def bid_amount(quantity: int, price: int) -> int:
    """Amount blocked for a bid: quantity x price."""
    return quantity * price


def group_indian(value: int) -> str:
    """Group digits the Indian way: 1234567 -> '12,34,567'."""
    digits = str(abs(value))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups) + "," + tail
    return f"-{digits}" if value < 0 else digits


def rupees_to_display(amount: int) -> str:
    """Convert rupees to display string: 5250 -> '₹5,250', 1000000 -> '₹10,00,000'."""
    if amount < 0:
        return f"-₹{group_indian(-amount)}"
    return f"₹{group_indian(amount)}"
