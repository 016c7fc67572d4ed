"""Billing hooks: webhook events and the expiry sweep."""

from .disable_expired_features_use_case import DisableExpiredFeaturesUseCase
from .handle_billing_event_use_case import HandleBillingEventUseCase

__all__ = ["HandleBillingEventUseCase", "DisableExpiredFeaturesUseCase"]
