"""Give seeded providers distinct cities, tags and service menus.

Usage:
    fyla-enhance-providers

Providers are matched by full name. For each match the bio and location are
updated, tags are replaced and existing services are deactivated in favour
of the new menu. Each provider is written in its own transaction.
"""
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import sessionmaker

from fyla.config import ClientConfig
from fyla.logging_config import get_logger, setup_structured_logging
from fyla.seeding.fixtures import DEFAULT_TAG_ID, PROVIDER_ENHANCEMENTS, TAG_IDS
from fyla.seeding.schema import PROVIDER_ROLES, Service, User, UserServiceProviderTag, create_session_factory, utc_now

logger = get_logger(__name__)


def tag_id(tag_name: str) -> int:
    """Map a tag name to its ServiceProviderTags id; unknown names map to Hair Stylist."""
    return TAG_IDS.get(tag_name, DEFAULT_TAG_ID)


class ProviderEnhancer:

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def enhance(self, enhancement: dict) -> bool:
        """
        Apply one enhancement.

        Returns:
            False when no provider with that name exists
        """
        lat, lng, city = enhancement["location"]
        with self.session_factory() as db, db.begin():
            provider = db.scalars(
                select(User)
                .where(User.FullName == enhancement["full_name"], User.Role.in_(PROVIDER_ROLES))
                .order_by(User.Id)
            ).first()
            if provider is None:
                logger.warning("provider_not_found", full_name=enhancement["full_name"])
                return False

            provider.Bio = enhancement["bio"]
            provider.LocationLat = lat
            provider.LocationLng = lng

            db.execute(delete(UserServiceProviderTag).where(UserServiceProviderTag.UserId == provider.Id))
            for tag in sorted({tag_id(name) for name in enhancement["tags"]}):
                db.add(UserServiceProviderTag(UserId=provider.Id, ServiceProviderTagId=tag))

            db.execute(update(Service).where(Service.ProviderId == provider.Id).values(IsActive=False))
            for name, description, price, duration in enhancement["services"]:
                db.add(Service(
                    ProviderId=provider.Id,
                    Name=name,
                    Description=description,
                    Price=price,
                    EstimatedDurationMinutes=duration,
                    IsActive=True,
                    CreatedAt=utc_now(),
                ))

        logger.info(
            "provider_enhanced",
            full_name=enhancement["full_name"],
            city=city,
            tags=enhancement["tags"],
            services=len(enhancement["services"]),
        )
        return True

    def run(self, enhancements: List[dict] = PROVIDER_ENHANCEMENTS) -> List[str]:
        """Enhance every listed provider; returns the names that were updated."""
        enhanced = [e["full_name"] for e in enhancements if self.enhance(e)]
        logger.info("provider_enhancement_complete", enhanced=len(enhanced), requested=len(enhancements))
        return enhanced


def main(database_url: Optional[str] = None):
    config = ClientConfig.from_env()
    setup_structured_logging(config.log_level, json_logs=False)
    enhancer = ProviderEnhancer(create_session_factory(database_url or config.seed.database_url))
    enhanced = enhancer.run()
    print(f"\nUpdated {len(enhanced)} service providers")


if __name__ == "__main__":
    main()
