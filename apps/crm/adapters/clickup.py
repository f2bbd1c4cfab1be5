# apps/crm/adapters/clickup.py
import logging
from typing import List, Optional

import requests

logger = logging.getLogger(__name__)

API_URL = 'https://api.clickup.com/api/v2'
TIMEOUT = 10


class ClickUpClient:
    """Creates task-board items that mirror leads and bookings."""

    def __init__(self, token: str, list_id: str, session: Optional[requests.Session] = None):
        self.list_id = list_id
        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': token,
            'Content-Type': 'application/json',
        })

    @property
    def is_configured(self) -> bool:
        return bool(self.session.headers.get('Authorization')) and bool(self.list_id)

    def create_task(self, name: str, description_lines: List[str], custom_fields: Optional[list] = None) -> dict:
        payload = {
            'name': name,
            'description': '\n'.join(line for line in description_lines if line),
        }
        if custom_fields:
            payload['custom_fields'] = custom_fields

        response = self.session.post(f'{API_URL}/list/{self.list_id}/task', json=payload, timeout=TIMEOUT)
        response.raise_for_status()
        data = response.json()
        logger.info("ClickUp task %s created in list %s", data.get('id'), self.list_id)
        return data
