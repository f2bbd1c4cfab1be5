from .outbox import DeliverySkipped, enqueue, process_outbox, register_handler
from .email import queue_email

__all__ = ['DeliverySkipped', 'enqueue', 'process_outbox', 'register_handler', 'queue_email']
