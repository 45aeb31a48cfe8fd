"""
security.identity - Deprecated marker for decoupled identity references.

Implementers expose one opaque identifier string used for identity
comparison.  Deprecated: give the entity a plain `identifier` attribute
instead.  Subclassing emits a DeprecationWarning.
"""

from __future__ import annotations

import warnings
from abc import ABC, abstractmethod


class SecurityIdentity(ABC):

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        warnings.warn(
            f"{cls.__name__}: SecurityIdentity is deprecated, "
            "use a plain identifier attribute instead",
            DeprecationWarning,
            stacklevel=2,
        )

    @abstractmethod
    def get_identifier(self) -> str:
        """Return the identifier for this security identity."""
