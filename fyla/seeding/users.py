"""Register sample clients and providers through the REST API.

Usage:
    fyla-seed-users

Each user is registered with the default password, then gets a profile
update (bio, location, avatar). Providers also get up to three services
from the template of their category. Users whose email already exists are
skipped, so the script can be re-run.
"""
import time
from dataclasses import dataclass, field
from typing import List, Optional

import requests

from fyla.circuit_breaker import CircuitBreaker
from fyla.config import ClientConfig
from fyla.http_client import call_with_protection, create_http_session
from fyla.logging_config import get_logger, setup_structured_logging
from fyla.seeding.fixtures import CLIENTS, MAX_SERVICES_PER_PROVIDER, PROVIDERS, SERVICE_TEMPLATES

logger = get_logger(__name__)

DUPLICATE_STATUSES = (400, 409)
AVATAR_URL = "https://api.dicebear.com/7.x/personas/svg?seed={seed}"


@dataclass
class SeedReport:
    created: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    services_added: int = 0


def _error_body(response: Optional[requests.Response]):
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class UserSeeder:
    """Creates the sample users against a running backend."""

    def __init__(
        self,
        base_url: str,
        password: str,
        session: Optional[requests.Session] = None,
        breaker: Optional[CircuitBreaker] = None,
        pause: float = 0.5,
    ):
        """
        Args:
            base_url: API base URL, e.g. http://localhost:5002/api
            password: Password given to every seeded account
            session: HTTP session (defaults to create_http_session())
            breaker: Circuit breaker shared by all calls
            pause: Seconds to wait between users
        """
        self.base_url = base_url.rstrip("/")
        self.password = password
        self.session = session or create_http_session()
        self.breaker = breaker or CircuitBreaker(failure_threshold=5, timeout=60)
        self.pause = pause

    def _call(self, method: str, path: str, token: Optional[str] = None, **kwargs) -> requests.Response:
        headers = kwargs.pop("headers", {})
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return call_with_protection(
            self.session, method, f"{self.base_url}{path}", self.breaker, headers=headers, **kwargs,
        )

    def register(self, user: dict, role: str) -> Optional[dict]:
        """
        Register one account.

        Returns:
            The register response ({"user": {...}, "token": ...}), or None when
            the email already exists
        """
        try:
            response = self._call("POST", "/auth/register", json={
                "fullName": user["full_name"],
                "email": user["email"],
                "password": self.password,
                "confirmPassword": self.password,
                "phoneNumber": user["phone_number"],
                "role": role,
            })
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status in DUPLICATE_STATUSES:
                logger.info("user_exists_skipped", email=user["email"], status=status,
                            detail=_error_body(e.response))
                return None
            raise
        logger.info("user_created", role=role, full_name=user["full_name"])
        return response.json()

    def update_profile(self, user_id: int, user: dict, token: str) -> None:
        self._call("PUT", f"/users/{user_id}", token=token, json={
            "bio": user["bio"],
            "locationLat": user["location_lat"],
            "locationLng": user["location_lng"],
            "profilePictureUrl": AVATAR_URL.format(seed=user["full_name"].replace(" ", "")),
        })
        logger.info("profile_updated", user_id=user_id, full_name=user["full_name"])

    def add_services(self, provider_id: int, category: str, token: str) -> int:
        """Post the first services of the category template; returns how many were added."""
        templates = SERVICE_TEMPLATES.get(category, [])[:MAX_SERVICES_PER_PROVIDER]
        for name, price, duration in templates:
            self._call("POST", "/services", token=token, json={
                "name": name,
                "description": f"Professional {name.lower()} service",
                "price": price,
                "estimatedDurationMinutes": duration,
                "isActive": True,
            })
        logger.info("services_added", provider_id=provider_id, count=len(templates))
        return len(templates)

    def _seed_one(self, user: dict, role: str, report: SeedReport) -> None:
        try:
            result = self.register(user, role)
            if result is None:
                report.skipped.append(user["email"])
                return
            user_id = result["user"]["id"]
            token = result["token"]
            self.update_profile(user_id, user, token)
            if "category" in user:
                report.services_added += self.add_services(user_id, user["category"], token)
            report.created.append(user["email"])
        except requests.exceptions.RequestException as e:
            logger.error("user_seed_failed", email=user["email"], error=str(e),
                         detail=_error_body(getattr(e, "response", None)))
            report.failed.append(user["email"])

    def run(self, clients: List[dict] = CLIENTS, providers: List[dict] = PROVIDERS) -> SeedReport:
        """Seed clients first, then providers."""
        report = SeedReport()
        for role, users in (("Client", clients), ("ServiceProvider", providers)):
            logger.info("seeding_role", role=role, count=len(users))
            for user in users:
                self._seed_one(user, role, report)
                if self.pause:
                    time.sleep(self.pause)
        logger.info(
            "user_seeding_complete",
            created=len(report.created),
            skipped=len(report.skipped),
            failed=len(report.failed),
            services_added=report.services_added,
        )
        return report


def main():
    config = ClientConfig.from_env()
    setup_structured_logging(config.log_level, json_logs=False)
    seeder = UserSeeder(config.api.base_url, config.seed.default_password)
    report = seeder.run()
    print(f"\nCreated {len(report.created)} users, skipped {len(report.skipped)} existing, "
          f"{len(report.failed)} failed")
    print(f"Default password for all users: {config.seed.default_password}")


if __name__ == "__main__":
    main()
