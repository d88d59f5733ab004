from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class ViewportModel(BaseModel):
    width: float = Field(gt=0, allow_inf_nan=False)
    height: float = Field(gt=0, allow_inf_nan=False)


class JointModel(BaseModel):
    x: float
    y: float
    confidence: float


class BoxModel(BaseModel):
    x: float
    y: float
    width: float
    height: float


class Point3DModel(BaseModel):
    x: float
    y: float
    z: float


class BodyPoseModel(BaseModel):
    kind: Literal["body_pose"]
    joints: Dict[str, JointModel] = {}


class HumanRectModel(BaseModel):
    kind: Literal["human_rect"]
    box: BoxModel
    upper_body_only: bool = False


class FaceModel(BaseModel):
    kind: Literal["face"]
    box: BoxModel


DetectionModel = Annotated[Union[BodyPoseModel, HumanRectModel, FaceModel], Field(discriminator="kind")]


class FrameRequest(BaseModel):
    """One frame of detector output plus the session state it was taken in."""
    frame_id: Optional[int] = None
    session_id: Optional[str] = None
    orientation: str = "portrait"
    viewport: ViewportModel
    detections: List[DetectionModel] = []
    camera_position: Optional[Point3DModel] = None
    image_bytes: Optional[str] = None


class OverlayModel(BaseModel):
    index: int
    kind: str
    box: BoxModel
    color: List[int]


class DistanceModel(BaseModel):
    index: int
    meters: float


class AnnotateResponse(BaseModel):
    frame_id: Optional[int] = None
    applied: bool
    overlays: List[OverlayModel]
    partial_count: int = 0
    invalid_count: int = 0
    image_orientation: str
    distances: List[DistanceModel] = []


class FrameAccepted(BaseModel):
    frame_id: Optional[int] = None
    accepted: bool
    frames_superseded: int


class OverlaySetResponse(BaseModel):
    frame_id: Optional[int] = None
    overlays: List[OverlayModel]


class DistanceRequest(BaseModel):
    camera: Point3DModel
    target: Point3DModel


class DistanceResponse(BaseModel):
    meters: float


class HealthSummary(BaseModel):
    healthy: bool
    service: str
    version: str
    worker_running: bool
    frames_annotated: int
    current_frame_id: Optional[int] = None
    overlays_shown: int
    uptime_seconds: float
    last_check: str
