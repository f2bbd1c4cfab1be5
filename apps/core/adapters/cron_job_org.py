# apps/core/adapters/cron_job_org.py
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests

logger = logging.getLogger(__name__)

API_URL = 'https://api.cron-job.org'
TIMEOUT = 15


@dataclass
class CronJobSpec:
    title: str
    url: str
    hours: List[int] = field(default_factory=lambda: [-1])  # -1 = every hour
    minutes: List[int] = field(default_factory=lambda: [0])
    timezone: str = 'Europe/Prague'
    enabled: bool = True

    def to_payload(self) -> dict:
        return {
            'job': {
                'url': self.url,
                'title': self.title,
                'enabled': self.enabled,
                'saveResponses': True,
                'requestMethod': 0,  # GET
                'schedule': {
                    'timezone': self.timezone,
                    'expiresAt': 0,
                    'hours': self.hours,
                    'mdays': [-1],
                    'minutes': self.minutes,
                    'months': [-1],
                    'wdays': [-1],
                },
            }
        }


class CronJobOrgClient:
    """Registers our /api/cron/* endpoints with cron-job.org."""

    def __init__(self, api_key: str, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {api_key}',
            'Content-Type': 'application/json',
        })

    def list_jobs(self) -> List[dict]:
        response = self.session.get(f'{API_URL}/jobs', timeout=TIMEOUT)
        response.raise_for_status()
        return response.json().get('jobs', [])

    def find_job(self, spec: CronJobSpec, jobs: List[dict]) -> Optional[dict]:
        for job in jobs:
            if job.get('title') == spec.title or job.get('url') == spec.url:
                return job
        return None

    def upsert(self, spec: CronJobSpec) -> dict:
        """Updates the matching job (by title or URL) or creates a new one."""
        existing = self.find_job(spec, self.list_jobs())

        if existing:
            job_id = existing['jobId']
            response = self.session.patch(f'{API_URL}/jobs/{job_id}', json=spec.to_payload(), timeout=TIMEOUT)
            response.raise_for_status()
            logger.info("Updated cron job %s (%s)", job_id, spec.title)
            return {'action': 'updated', 'jobId': job_id}

        response = self.session.put(f'{API_URL}/jobs', json=spec.to_payload(), timeout=TIMEOUT)
        response.raise_for_status()
        job_id = response.json().get('jobId')
        logger.info("Created cron job %s (%s)", job_id, spec.title)
        return {'action': 'created', 'jobId': job_id}
