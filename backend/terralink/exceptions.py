# terralink/exceptions.py
# ------------------------------------------------------------
# Error types raised outside the detection engine.
#
# The engine itself never raises; loading and lookup do.
# ------------------------------------------------------------


class TerraLinkError(Exception):
    """Base class for backend errors."""


class DatasetError(TerraLinkError):
    """The reading dataset could not be read or validated."""


class FarmNotFoundError(TerraLinkError):
    def __init__(self, farm_id: str):
        super().__init__(f"Unknown farm: {farm_id}")
        self.farm_id = farm_id
