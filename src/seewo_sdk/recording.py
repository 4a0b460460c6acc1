"""
Live streaming and recording endpoints

Start and stop streaming on a third-party device, and list the videos
recorded for a business id.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import List, Optional

from .signing.types import HttpMethod, KvPairs
from .typed import (
    JsonModel,
    JsonBodyMixin,
    SeewoTypedRequest,
    json_field,
    as_int,
    optional_str,
    empty_as_none,
    seconds,
    total_seconds,
    list_of,
)


@dataclass
class OtherDeviceV1StreamingStartResponse(JsonModel):
    code: int = json_field(decoder=as_int)
    message: Optional[str] = json_field(decoder=optional_str, default=None)


@dataclass
class OtherDeviceV1StreamingStartRequest(JsonBodyMixin, JsonModel, SeewoTypedRequest):
    """Start pushing a device's stream, optionally to a custom URL."""
    METHOD = HttpMethod.POST
    URI = "/live/other-device/v1/streaming/start"
    RESPONSE = OtherDeviceV1StreamingStartResponse

    device_sn: str
    stream_url: Optional[str] = None
    biz_id: Optional[str] = None


@dataclass
class OtherDeviceV1StreamingStopResponse(JsonModel):
    code: int = json_field(decoder=as_int)
    message: Optional[str] = json_field(decoder=optional_str, default=None)


@dataclass
class OtherDeviceV1StreamingStopRequest(JsonBodyMixin, JsonModel, SeewoTypedRequest):
    """Stop streaming on a device."""
    METHOD = HttpMethod.POST
    URI = "/live/other-device/v1/streaming/stop"
    RESPONSE = OtherDeviceV1StreamingStopResponse

    device_sn: str


@dataclass
class StreamingVideo(JsonModel):
    """
    A recorded video segment.

    Empty strings from the server decode as None.
    """
    duration: timedelta = json_field(name='durationInSec', decoder=seconds, encoder=total_seconds)
    size_in_kb: int = json_field(decoder=as_int)
    record_timestamp: int = json_field(decoder=as_int)
    name: Optional[str] = json_field(decoder=empty_as_none, default=None)
    biz_id: Optional[str] = json_field(decoder=empty_as_none, default=None)
    ftp_path: Optional[str] = json_field(decoder=empty_as_none, default=None)
    url: Optional[str] = json_field(decoder=empty_as_none, default=None)
    index: Optional[str] = json_field(decoder=empty_as_none, default=None)
    video_group_id: Optional[str] = json_field(decoder=empty_as_none, default=None)
    video_group_name: Optional[str] = json_field(decoder=empty_as_none, default=None)
    room_name: Optional[str] = json_field(decoder=empty_as_none, default=None)
    teacher_name: Optional[str] = json_field(decoder=empty_as_none, default=None)
    subject_name: Optional[str] = json_field(decoder=empty_as_none, default=None)
    stage_name: Optional[str] = json_field(decoder=empty_as_none, default=None)


@dataclass
class StreamingVideosResponse(JsonModel):
    code: int = json_field(decoder=as_int)
    data: List[StreamingVideo] = json_field(decoder=list_of(StreamingVideo))
    message: Optional[str] = json_field(decoder=optional_str, default=None)


@dataclass
class StreamingVideosRequest(SeewoTypedRequest):
    """List recorded videos for a business id."""
    METHOD = HttpMethod.GET
    URI = "/live/resource/v1/videos"
    RESPONSE = StreamingVideosResponse

    biz_id: str

    def queries(self) -> KvPairs:
        return {"bizId": self.biz_id}
