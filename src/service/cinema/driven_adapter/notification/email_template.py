"""HTML bodies for outgoing notification emails."""

from datetime import datetime
from html import escape
from zoneinfo import ZoneInfo

from src.platform.types.clock import ensure_utc
from src.service.cinema.app.dto.notification_job import TicketBundleJob, VerificationCodeJob


TICKET_SUBJECT = 'Your Ticket Is Ready'
VERIFICATION_SUBJECT = 'Email Verification'


def ticket_verify_url(base_url: str, qr_token: str) -> str:
    return f'{base_url.rstrip("/")}/tickets/verify?token={qr_token}'


def _localize(value: datetime, timezone_name: str) -> datetime:
    return ensure_utc(value).astimezone(ZoneInfo(timezone_name))


def render_ticket_email(job: TicketBundleJob, *, timezone_name: str = 'UTC') -> str:
    start = _localize(job.start_time, timezone_name)
    seats = ', '.join(line.seat_code for line in job.tickets)

    return f"""
    <!DOCTYPE html>
    <html>
      <body style="margin:0; padding:0; font-family: Arial, Helvetica, sans-serif; background-color:#f6f6f6;">
        <table width="100%" cellpadding="0" cellspacing="0" style="padding:20px;">
          <tr>
            <td align="center">
              <table width="600" cellpadding="0" cellspacing="0" style="background:#ffffff; border-radius:8px; padding:24px;">
                <tr>
                  <td align="center" style="padding-bottom:16px;">
                    <h2 style="margin:0; color:#222;">🎬 {TICKET_SUBJECT}</h2>
                  </td>
                </tr>
                <tr>
                  <td style="padding-bottom:12px; color:#333;">
                    <p style="margin:0;">Hi <strong>{escape(job.recipient_name)}</strong>,</p>
                  </td>
                </tr>
                <tr>
                  <td style="padding-bottom:16px; color:#333;">
                    <p style="margin:0;">
                      Your payment was successful. Your tickets are attached as QR codes.
                      Please present them at the entrance gate.
                    </p>
                  </td>
                </tr>
                <tr>
                  <td style="padding:16px; background:#f9f9f9; border-radius:6px; color:#333;">
                    <p style="margin:4px 0;"><strong>Booking:</strong> #{job.booking_id}</p>
                    <p style="margin:4px 0;"><strong>Movie:</strong> {escape(job.movie_title)}</p>
                    <p style="margin:4px 0;"><strong>Cinema:</strong> {escape(job.cinema_name)}</p>
                    <p style="margin:4px 0;"><strong>Studio:</strong> {escape(job.studio_name)}</p>
                    <p style="margin:4px 0;"><strong>Date:</strong> {start.strftime('%d %B %Y')}</p>
                    <p style="margin:4px 0;"><strong>Start Time:</strong> {start.strftime('%H.%M')}</p>
                    <p style="margin:4px 0;"><strong>Seat:</strong> {escape(seats)}</p>
                  </td>
                </tr>
                <tr>
                  <td style="padding-top:12px; color:#555; font-size:14px;">
                    <ul style="padding-left:18px; margin:0;">
                      <li>Please arrive at least <strong>15 minutes</strong> before the show.</li>
                      <li>Each ticket is valid for <strong>one-time entry only</strong>.</li>
                      <li>Do not share your QR code with others.</li>
                    </ul>
                  </td>
                </tr>
                <tr>
                  <td style="padding-top:24px; color:#777; font-size:13px;">
                    <p style="margin:0;">Enjoy the movie 🍿<br/><strong>Cinema Booking Team</strong></p>
                  </td>
                </tr>
              </table>
            </td>
          </tr>
        </table>
      </body>
    </html>
    """.strip()


def render_verification_email(job: VerificationCodeJob) -> str:
    return f"""
    <h2>{VERIFICATION_SUBJECT}</h2>
    <p>Hello {escape(job.recipient_name)}!</p>
    <p>Please use the verification code below to confirm your email address:</p>
    <div style="font-size: 24px; font-weight: bold; letter-spacing: 4px; margin: 16px 0;">
      {escape(job.code)}
    </div>
    <p>This code will expire in <strong>{job.expires_in_minutes} minutes</strong>.</p>
    <p>If you did not request this, please ignore this email.</p>
    <p style="color: #888; font-size: 12px;">Do not share this code with anyone.</p>
    """.strip()
