from datetime import datetime, timezone
from html import escape
from typing import Optional, Tuple


def contact_subject(name: str) -> str:
    return f"New contact message from {name}"


def render_contact_text(name: str, email: str, inquiry: str) -> str:
    return (
        f"Name: {name}\n"
        f"Email: {email}\n"
        f"Inquiry: {inquiry}\n"
    )


def render_contact_html(
    name: str,
    email: str,
    inquiry: str,
    submitted_at: Optional[datetime] = None
) -> str:
    """
    Render the HTML notification for a contact form submission.

    Args:
        name: Submitter's name
        email: Submitter's email address, used for the mailto links
        inquiry: The message text; line breaks are preserved
        submitted_at: Submission time shown in the footer, defaults to now (UTC)

    Returns:
        HTML document with every submitted value escaped
    """
    submitted_at = submitted_at or datetime.now(timezone.utc)
    timestamp = submitted_at.strftime("%Y-%m-%d %H:%M:%S %Z").strip()

    name = escape(name)
    email = escape(email, quote=True)
    inquiry = escape(inquiry)

    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="UTF-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
        <style>
            body {{ margin: 0; padding: 0; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif; background-color: #f5f5f5; }}
            .container {{ max-width: 600px; margin: 20px auto; background: #ffffff; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }}
            .header {{ background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 30px; border-radius: 8px 8px 0 0; text-align: center; }}
            .content {{ padding: 30px; }}
            .field {{ padding: 15px; background-color: #f8f9fa; border-left: 4px solid #667eea; margin-bottom: 10px; }}
            .label {{ margin: 0 0 5px 0; color: #999; font-size: 12px; text-transform: uppercase; letter-spacing: 1px; }}
            .value {{ margin: 0; color: #333; font-size: 16px; font-weight: 500; }}
            .inquiry {{ line-height: 1.5; white-space: pre-wrap; }}
            .cta-button {{ display: inline-block; padding: 12px 30px; background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: #ffffff; text-decoration: none; border-radius: 5px; font-weight: 500; font-size: 14px; }}
            .footer {{ padding: 20px; background-color: #f8f9fa; border-radius: 0 0 8px 8px; text-align: center; color: #999; font-size: 12px; }}
            h1 {{ margin: 0; font-size: 24px; }}
        </style>
    </head>
    <body>
        <div class="container">
            <div class="header">
                <h1>New Contact Form Submission</h1>
            </div>
            <div class="content">
                <p style="color: #666;">You have received a new contact form submission from your website:</p>

                <div class="field">
                    <p class="label">Name</p>
                    <p class="value">{name}</p>
                </div>
                <div class="field">
                    <p class="label">Email Address</p>
                    <p class="value"><a href="mailto:{email}" style="color: #667eea; text-decoration: none;">{email}</a></p>
                </div>
                <div class="field">
                    <p class="label">Message</p>
                    <p class="value inquiry">{inquiry}</p>
                </div>

                <div style="text-align: center; margin-top: 30px;">
                    <a href="mailto:{email}" class="cta-button">Reply to {name}</a>
                </div>
            </div>
            <div class="footer">
                <p style="margin: 0;">This email was sent from your website contact form</p>
                <p style="margin: 5px 0 0 0;">Timestamp: {timestamp}</p>
            </div>
        </div>
    </body>
    </html>
    """


def render_contact_email(
    name: str,
    email: str,
    inquiry: str,
    submitted_at: Optional[datetime] = None
) -> Tuple[str, str]:
    """Return the (text, html) bodies for a contact notification."""
    return (
        render_contact_text(name, email, inquiry),
        render_contact_html(name, email, inquiry, submitted_at),
    )
