from decimal import Decimal


def format_amount(amount) -> str:
    """Render a currency amount without trailing zero paise: 1200, 1250.50."""
    amount = Decimal(amount)
    if amount == amount.to_integral_value():
        return f'{amount:.0f}'
    return f'{amount:.2f}'
