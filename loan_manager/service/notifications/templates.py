"""Payment reminder message templates."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from html import escape

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class EmailContent:
    subject: str
    text: str
    html: str


def format_usd(amount: float) -> str:
    """Format an amount as US dollars, e.g. $1,234.50."""
    value = Decimal(str(amount)).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_date(value: date) -> str:
    """US short date without zero padding, e.g. 9/30/2025."""
    return f"{value.month}/{value.day}/{value.year}"


def payment_reminder_email(borrower_name: str, due_amount: float, due_date: date) -> EmailContent:
    amount = format_usd(due_amount)
    when = format_date(due_date)
    name = escape(borrower_name)

    html = f"""
      <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <h2 style="color: #2563eb;">Payment Reminder</h2>
        <p>Hello {name},</p>
        <p>This is a friendly reminder that you have a payment due.</p>
        <div style="background-color: #f3f4f6; padding: 20px; border-radius: 8px; margin: 20px 0;">
          <p style="margin: 0;"><strong>Due Amount:</strong> {amount}</p>
          <p style="margin: 10px 0 0 0;"><strong>Due Date:</strong> {when}</p>
        </div>
        <p>Please make a payment at your earliest convenience.</p>
        <p>Thank you for your business.</p>
        <hr style="border: none; border-top: 1px solid #e5e7eb; margin: 30px 0;">
        <p style="color: #6b7280; font-size: 12px;">This is an automated message. Please do not reply to this email.</p>
      </div>
    """

    text = (
        f"Hello {borrower_name},\n\n"
        f"This is a friendly reminder that your due amount is {amount} "
        f"with a due date of {when}. "
        "Please make a payment at your earliest convenience.\n\n"
        "Thank you."
    )

    return EmailContent(
        subject=f"Payment Due Reminder for {borrower_name}",
        text=text,
        html=html,
    )


def payment_reminder_sms(borrower_name: str, due_amount: float, due_date: date) -> str:
    return (
        f"Hi {borrower_name}, payment reminder: {format_usd(due_amount)} "
        f"due on {format_date(due_date)}. Please make payment soon. Thank you!"
    )
