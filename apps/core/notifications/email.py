# apps/core/notifications/email.py
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template import TemplateDoesNotExist
from django.template.loader import render_to_string

from .outbox import enqueue, register_handler


def queue_email(to, subject, template, context=None, reply_to=None):
    """Stores an e-mail in the outbox. `context` must be JSON serializable."""
    if isinstance(to, str):
        to = [to]
    return enqueue('email', {
        'to': list(to),
        'subject': subject,
        'template': template,
        'context': context or {},
        'reply_to': reply_to,
    })


@register_handler('email')
def send_templated_email(payload: dict):
    context = dict(payload.get('context') or {})
    context.setdefault('app_url', settings.APP_URL)

    text_body = render_to_string(f"emails/{payload['template']}.txt", context)
    message = EmailMultiAlternatives(
        subject=payload['subject'],
        body=text_body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=payload['to'],
        reply_to=[payload['reply_to']] if payload.get('reply_to') else None,
    )

    try:
        html_body = render_to_string(f"emails/{payload['template']}.html", context)
    except TemplateDoesNotExist:
        html_body = None
    if html_body:
        message.attach_alternative(html_body, 'text/html')

    message.send(fail_silently=False)
