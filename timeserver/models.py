from pydantic import BaseModel, ConfigDict, Field, StrictStr, model_validator
from typing import Any, Dict, Optional


class DateInfo(BaseModel):
    year: int
    month: int
    day: int


class TimeInfo(BaseModel):
    hour: int
    minute: int
    second: int
    nano_second: float


class TimezoneInfo(BaseModel):
    name: str
    shift: int  # seconds east of UTC


class DateTimeInfo(BaseModel):
    date: Optional[DateInfo] = None
    time: Optional[TimeInfo] = None
    tz: Optional[TimezoneInfo] = None


class ErrorMessage(BaseModel):
    error_message: str


# Body keys match case-insensitively with underscores ignored
_CONVERSION_KEYS = {
    "fromtimezone": "from_timezone",
    "totimezone": "to_timezone",
    "datetimestring": "datetime_string",
}


class ConversionRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    from_timezone: StrictStr = ""
    to_timezone: StrictStr = ""
    datetime_string: StrictStr = ""

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, data: Any) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise ValueError("request body must be a JSON object")
        folded: Dict[str, Any] = {}
        for key, value in data.items():
            field = _CONVERSION_KEYS.get(key.replace("_", "").lower())
            if field is None or value is None:
                continue
            folded[field] = value
        return folded


class ConversionResult(BaseModel):
    timezone: str = Field(serialization_alias="Timezone")
    datetime_string: str = Field(serialization_alias="DatetimeString")
