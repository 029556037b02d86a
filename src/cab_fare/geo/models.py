from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)

    def as_param(self) -> str:
        return f"{self.lat},{self.lng}"

    def rounded(self, precision: int) -> str:
        return f"{self.lat:.{precision}f},{self.lng:.{precision}f}"


class DistanceResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    distance_km: float = Field(ge=0.0)
    duration_min: int = Field(ge=0)
