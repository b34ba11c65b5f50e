"""Chain Detect Service Layer.

The detection service fans probes out across chains and reduces them to one answer.
"""

from chaindetect.services.detection_service import (
    ChainDetectionService,
    close_detection_service,
    get_detection_service,
)

__all__ = [
    "ChainDetectionService",
    "close_detection_service",
    "get_detection_service",
]
