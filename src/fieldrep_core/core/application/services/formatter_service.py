from decimal import ROUND_HALF_UP, Decimal

from fieldrep_core.core.domain.entities.order_request_entity import OrderRequestEntity


class FormatterService:
    """
    Formatting for request summaries and list rows,
    e.g. ₹300 for whole amounts and ₹12.50 otherwise.
    """

    def __init__(self, currency_symbol: str = "₹"):
        self.currency_symbol = currency_symbol

    def format_currency(self, amount: Decimal | float | int) -> str:
        amt = Decimal(str(amount))
        if amt == amt.to_integral_value():
            return f"{self.currency_symbol}{int(amt)}"
        amt = amt.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        return f"{self.currency_symbol}{amt}"

    def order_title(self, order: OrderRequestEntity) -> str:
        return f"Order: {order.product_name}"

    def order_summary(self, order: OrderRequestEntity) -> str:
        """
        Human readable order description stored next to the order,
        context lines only when the representative filled them in.
        """
        lines = [
            f"Type: {order.order_type}",
            f"Quantity: {order.quantity}",
            f"Price: {self.format_currency(order.product_price)}",
        ]
        if order.pts is not None:
            lines.append(f"PTS: {self.format_currency(order.pts)}")
        if order.ptr is not None:
            lines.append(f"PTR: {self.format_currency(order.ptr)}")
        lines.append(f"Total: {self.format_currency(order.total_amount)}")
        lines.append(f"Priority: {order.priority}")
        if order.hospital_name:
            lines.append(f"Hospital: {order.hospital_name}")
        if order.doctor_name:
            lines.append(f"Doctor: {order.doctor_name}")
        if order.remarks:
            lines.append(f"Remarks: {order.remarks}")
        return "\n".join(lines)
