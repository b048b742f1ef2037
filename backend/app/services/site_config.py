"""Singleton site configuration, created lazily with defaults."""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.constants import SITE_CONFIG_ID
from app.models import SiteConfig
from app.schemas import SiteConfigUpdate
from app.services import validators
from app.utils.logger import logger


def find_site_config(db: Session) -> SiteConfig | None:
    return db.get(SiteConfig, SITE_CONFIG_ID)


def get_or_create_site_config(db: Session) -> SiteConfig:
    """
    Return the configuration row, inserting the default one on first use.

    Two first readers racing on the insert both end up with the same row:
    the loser's primary-key violation is rolled back and the row re-read.
    """
    config = find_site_config(db)
    if config:
        return config

    config = SiteConfig(
        id=SITE_CONFIG_ID,
        contact_email=settings.default_contact_email,
        instagram="",
        youtube="",
        vimeo="",
    )
    db.add(config)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.debug("Site configuration created concurrently, re-reading")
        return find_site_config(db)

    db.refresh(config)
    logger.info("Created default site configuration")
    return config


def contact_recipient(db: Session) -> str:
    """Where contact notifications go; never creates the configuration row."""
    config = find_site_config(db)
    return config.contact_email if config else settings.default_contact_email


def update_site_config(db: Session, payload: SiteConfigUpdate) -> SiteConfig:
    validators.validate_site_config(payload)

    config = get_or_create_site_config(db)
    config.contact_email = payload.contactEmail.strip()

    links = payload.socialLinks
    if links:
        for network in ("instagram", "youtube", "vimeo"):
            value = getattr(links, network)
            if value is not None:
                setattr(config, network, value.strip())

    db.commit()
    db.refresh(config)
    logger.info("Updated site configuration")
    return config
