"""Email templates for the identity notifications.

Placeholders are filled with ``str.format``; literal braces in the HTML
must be doubled.
"""

from warden_identity.application.ports import EmailTemplate

WELCOME_SUBJECT = "welcome"
PASSWORD_RESET_SUBJECT = "forgot password"

WELCOME_TEMPLATE = EmailTemplate(
    name="user_signup",
    text="""Hello {username},

Welcome aboard! Your account has been created.

Once your account is confirmed you can log in with your username
or your email address ({email}).
""",
    html="""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; margin: 0; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto; padding: 40px;">
        <h2 style="margin-top: 0;">Welcome, {username}!</h2>
        <p>Your account has been created.</p>
        <p>Once your account is confirmed you can log in with your username
        or your email address ({email}).</p>
    </div>
</body>
</html>
""",
)

PASSWORD_RESET_TEMPLATE = EmailTemplate(
    name="forgot_password",
    text="""Hello {username},

You requested a password reset.

Use the following token to choose a new password:
{token}

If you didn't request this, you can safely ignore this email.
""",
    html="""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; margin: 0; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto; padding: 40px;">
        <h2 style="margin-top: 0;">Password Reset Request</h2>
        <p>Hello {username}, you requested a password reset.</p>
        <p>Use the following token to choose a new password:</p>
        <p style="word-break: break-all; font-family: monospace;">{token}</p>
        <p style="color: #9ca3af; font-size: 13px;">If you didn't request this, you can safely ignore this email.</p>
    </div>
</body>
</html>
""",
)
