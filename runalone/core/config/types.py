"""
Semantic Type Definitions & Validation Primitives.

Annotated pydantic types shared by the configuration schemas. Centralizing
the bounds here keeps the retry schedule and guard configuration free of
ad-hoc range checks.
"""
# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
from typing import Annotated

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
from pydantic import Field

# =========================================================================== #
#                                RETRY POLICY                                 #
# =========================================================================== #

RetryCount    = Annotated[int, Field(ge=0, description="Re-attempts after the first failure")]
RetryInterval = Annotated[int, Field(ge=1, description="Seconds slept before each re-attempt")]
