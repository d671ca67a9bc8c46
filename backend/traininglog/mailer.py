import requests

from traininglog.settings import get_settings

RESEND_API_URL = "https://api.resend.com/emails"

RESET_EMAIL_HTML = """
<div style="font-family: sans-serif; max-width: 480px; margin: 0 auto;">
  <h2>Reset your password</h2>
  <p>Click the link below to set a new password. This link expires in 1 hour.</p>
  <p><a href="{reset_url}">Reset Password</a></p>
  <p style="color: #666; font-size: 14px;">If you didn't request this, you can safely ignore this email.</p>
</div>
"""

def send_password_reset_email(to: str, reset_url: str) -> None:
    s = get_settings()
    if not s.RESEND_API_KEY:
        raise RuntimeError("RESEND_API_KEY is not configured")
    resp = requests.post(
        RESEND_API_URL,
        headers={
            "Authorization": f"Bearer {s.RESEND_API_KEY}",
            "Content-Type": "application/json",
        },
        json={
            "from": f"Solo Training Log <{s.RESEND_FROM_EMAIL}>",
            "to": [to],
            "subject": "Reset your password",
            "html": RESET_EMAIL_HTML.format(reset_url=reset_url),
        },
        timeout=10,
    )
    resp.raise_for_status()
