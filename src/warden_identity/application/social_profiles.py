"""Provider-specific normalization of social login profiles.

Providers disagree on where the external user id lives. Each normalizer
returns a ``SocialProfile`` whose ``id`` is the provider's stable id.
"""

from collections.abc import Callable

from warden_auth import ValidationError
from warden_identity.schemas import SocialProfile


def _google(profile: SocialProfile) -> SocialProfile:
    # Google puts the account id in the OpenID ``sub`` claim
    subject = profile.raw.get("sub")
    if subject is None:
        return profile
    return profile.model_copy(update={"id": str(subject)})


PROFILE_NORMALIZERS: dict[str, Callable[[SocialProfile], SocialProfile]] = {
    "google": _google,
}


def normalize_profile(provider: str, profile: SocialProfile) -> SocialProfile:
    """Apply the provider's normalizer; unknown providers pass through.

    Raises
    ------
    ValidationError
        If the normalized profile carries no external id
    """
    normalizer = PROFILE_NORMALIZERS.get(provider)
    if normalizer is not None:
        profile = normalizer(profile)

    if not profile.id:
        msg = f"{provider} profile has no external id"
        raise ValidationError(msg)

    return profile
