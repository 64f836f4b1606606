"""
Loan Manager - Loan Applications, Notifications & Payments

FastAPI services for tracking loan applications, borrowers and
repayments, plus the notification (SendGrid/Twilio) and payment
(Stripe) gateways they call.
"""

__version__ = "0.1.0"
