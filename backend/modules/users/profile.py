"""
Projection from stored ``User`` records to client-safe ``UserProfile``.

``to_user_profile`` is the only way a user leaves the service layer.
Credential and token fields are never copied.
"""

from typing import Optional

from .models import Address, Preferences, User, UserProfile


def split_name(name: Optional[str]) -> tuple[str, str]:
    """
    Split a combined name into (first, last).

    The first whitespace-separated token is the first name, the rest
    (re-joined with single spaces) is the last name.

    Example:
        >>> split_name("  Ada   King Lovelace ")
        ('Ada', 'King Lovelace')
    """
    if not name:
        return "", ""
    parts = name.split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def join_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    return f"{first_name or ''} {last_name or ''}".strip()


def _address(user: User) -> Optional[Address]:
    parts = {
        "street": user.address_street,
        "city": user.address_city,
        "state": user.address_state,
        "country": user.address_country,
        "postal_code": user.address_postal_code,
    }
    if not any(parts.values()):
        return None
    return Address(**parts)


def to_user_profile(user: User) -> UserProfile:
    """Build the sanitized profile for a user record."""
    legacy_first, legacy_last = split_name(user.name)
    first_name = user.first_name if user.first_name is not None else legacy_first
    last_name = user.last_name if user.last_name is not None else legacy_last

    return UserProfile(
        id=user.id,
        email=user.email,
        first_name=first_name,
        last_name=last_name,
        full_name=join_name(first_name, last_name),
        avatar=user.avatar,
        phone=user.phone,
        date_of_birth=user.date_of_birth,
        gender=user.gender,
        address=_address(user),
        preferences=Preferences(
            language=user.preferences_language,
            theme=user.preferences_theme,
            notifications=user.preferences_notifications,
        ),
        email_verified=user.email_verified,
        phone_verified=user.phone_verified,
        device_id=user.device_id,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
