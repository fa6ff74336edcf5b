"""
Email templates.

Builders return OutgoingEmail values; user input is HTML-escaped
before it is placed in a body.
"""

from html import escape

from .ports import Attachment, OutgoingEmail, Registration

RECEIPTS_SENDER = "Comprobantes"
INQUIRIES_SENDER = "Consultas"

FOOTER = "<br><br><small>Este mensaje es automático, por favor no respondas.</small>"


def _multiline(value: str) -> str:
    return escape(value).replace("\n", "<br>")


def _topic_line(topic: str) -> str:
    return f"<p><b>Asunto:</b> {escape(topic)}</p>" if topic else ""


def _subject_suffix(topic: str) -> str:
    return f" - {topic}" if topic else ""


def verification_email(registration: Registration, link: str, *, site_name: str) -> OutgoingEmail:
    """Email with the link that redeems the registration's token."""
    html = f"""
        <h3>Hola {escape(registration.name)} {escape(registration.surname)},</h3>
        <p>Gracias por tu interés. Haz clic en el siguiente enlace para verificar tu correo:</p>
        <a href="{escape(link)}">{escape(link)}</a>
        {FOOTER}
    """
    return OutgoingEmail(
        to=registration.email,
        subject="Verifica tu correo",
        html=html,
        sender_name=site_name,
        text=f"Verifica tu correo: {link}",
    )


def receipt_admin_email(
    *, admin_email: str, name: str, email: str, concept: str, receipt: Attachment
) -> OutgoingEmail:
    html = f"""
        <h3>Nuevo comprobante de pago</h3>
        <p><b>Nombre:</b> {escape(name)}</p>
        <p><b>Correo:</b> {escape(email)}</p>
        <p><b>Concepto:</b> {escape(concept)}</p>
    """
    return OutgoingEmail(
        to=admin_email,
        subject=f"Comprobante de pago - {concept} - {name}",
        html=html,
        sender_name=RECEIPTS_SENDER,
        text=f"Nuevo comprobante de {name} ({email}). Concepto: {concept}",
        attachments=(receipt,),
    )


def receipt_ack_email(
    *, name: str, email: str, concept: str, site_url: str, site_name: str
) -> OutgoingEmail:
    private_area = f"{site_url.rstrip('/')}/zona-privada.html"
    html = f"""
        <!doctype html><html><head><meta charset="utf-8"><title>Confirmación de envío</title></head>
        <body style="font-family:Arial,Helvetica,sans-serif; background:#f8f8f3; margin:0; padding:20px;">
          <table role="presentation" width="100%" cellspacing="0" cellpadding="0"
                 style="max-width:600px;margin:0 auto;background:#ffffff;border:1px solid #e5e5e5;border-radius:8px;">
            <tr><td style="padding:24px; text-align:center;">
              <h1 style="color:#198754; margin:0 0 12px 0;">¡Gracias, {escape(name)}!</h1>
              <p style="margin:0 0 16px 0; color:#333;">Hemos recibido tu comprobante de pago correctamente.</p>
              <p style="margin:0 0 16px 0; color:#333;">
                <b>Concepto:</b> {escape(concept)}<br>
                <b>Correo:</b> {escape(email)}
              </p>
              <p style="margin:0 0 16px 0; color:#333;">En breve verificaremos la información y te contactaremos.</p>
              <div style="margin-top:24px;">
                <a href="{escape(private_area)}"
                   style="background:#9DA588;color:#fff;text-decoration:none;padding:10px 16px;border-radius:6px;display:inline-block;">
                  Volver a la Zona Privada
                </a>
              </div>
            </td></tr>
          </table>
          <p style="text-align:center; color:#888; font-size:12px; margin-top:12px;">
            Este mensaje es automático. No respondas a este correo.
          </p>
        </body></html>
    """
    return OutgoingEmail(
        to=email,
        subject="Hemos recibido tu comprobante de pago",
        html=html,
        sender_name=site_name,
    )


def free_inquiry_admin_email(
    *, admin_email: str, name: str, email: str, topic: str, message: str
) -> OutgoingEmail:
    html = f"""
        <h3>Consulta GRATUITA recibida</h3>
        <p><b>Nombre:</b> {escape(name)}</p>
        <p><b>Correo:</b> {escape(email)}</p>
        {_topic_line(topic)}
        <p><b>Mensaje:</b><br>{_multiline(message)}</p>
    """
    return OutgoingEmail(
        to=admin_email,
        subject=f"Consulta GRATUITA - {name}{_subject_suffix(topic)}",
        html=html,
        sender_name=INQUIRIES_SENDER,
    )


def free_inquiry_ack_email(
    *, name: str, email: str, topic: str, message: str, site_name: str
) -> OutgoingEmail:
    html = f"""
        <h2>¡Gracias, {escape(name)}!</h2>
        <p>Hemos recibido tu consulta gratuita. En breve te responderemos.</p>
        {_topic_line(topic)}
        <p><b>Tu consulta:</b><br>{_multiline(message)}</p>
    """
    return OutgoingEmail(
        to=email,
        subject="Hemos recibido tu consulta gratuita",
        html=html,
        sender_name=site_name,
    )


def quote_admin_email(
    *,
    admin_email: str,
    name: str,
    email: str,
    topic: str,
    description: str,
    attachment: Attachment | None,
) -> OutgoingEmail:
    html = f"""
        <h3>Consulta de PAGO (para PRESUPUESTO)</h3>
        <p><b>Nombre:</b> {escape(name)}</p>
        <p><b>Correo:</b> {escape(email)}</p>
        {_topic_line(topic)}
        <p><b>Descripción:</b><br>{_multiline(description)}</p>
        <p><i>Revisar y responder al usuario con el precio y método de pago.</i></p>
    """
    return OutgoingEmail(
        to=admin_email,
        subject=f"Consulta de PAGO (PRESUPUESTO) - {name}{_subject_suffix(topic)}",
        html=html,
        sender_name=INQUIRIES_SENDER,
        attachments=(attachment,) if attachment is not None else (),
    )


def quote_ack_email(
    *, name: str, email: str, topic: str, description: str, site_name: str
) -> OutgoingEmail:
    html = f"""
        <h2>¡Gracias, {escape(name)}!</h2>
        <p>Hemos recibido tu consulta. La revisaremos y te enviaremos un <b>presupuesto</b> en breve.</p>
        {_topic_line(topic)}
        <p><b>Descripción enviada:</b><br>{_multiline(description)}</p>
    """
    return OutgoingEmail(
        to=email,
        subject="Hemos recibido tu consulta (te enviaremos presupuesto)",
        html=html,
        sender_name=site_name,
    )
