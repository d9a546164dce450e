"""数据模型 -- Tool 请求/响应信封 + Maps 载荷

Tool 层只认识 ToolRequest / ToolResponse / ToolList，content 对客户端不透明。
Place / Direction 等载荷模型由能力层（maps.py）在边界处显式解析，
解析结果以 kind 字段区分的 PlaceList / PlaceDetail / DirectionResult 返回。
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Tool 信封
# ---------------------------------------------------------------------------


class ToolRequest(BaseModel):
    """单次 Tool 调用请求（每次调用构造，不持久化）"""

    name: str = Field(min_length=1, description="Tool 名称")
    arguments: dict[str, Any] = Field(default_factory=dict, description="JSON 参数表")


class ToolResponse(BaseModel):
    """Tool 调用成功响应，content 形状由具体 Tool 决定"""

    content: Any = Field(description="不透明载荷，客户端不校验")


class ToolDescriptor(BaseModel):
    """远端声明的单个 Tool"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")


class ToolList(BaseModel):
    """远端 Tool 目录（仅用于诊断）"""

    tools: list[ToolDescriptor] = Field(default_factory=list)

    def names(self) -> list[str]:
        return [t.name for t in self.tools]


# ---------------------------------------------------------------------------
# Maps 载荷
# ---------------------------------------------------------------------------


class LatLng(BaseModel):
    """经纬度坐标"""

    lat: float
    lng: float


class Geometry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    location: LatLng | None = None


class OpeningHours(BaseModel):
    model_config = ConfigDict(extra="ignore")

    open_now: bool | None = None
    weekday_text: list[str] = Field(default_factory=list)


class Place(BaseModel):
    """远端返回的地点（只读消费），未知字段忽略

    formatted_address 必填且非空：没有地址的条目不是可用地点。
    """

    model_config = ConfigDict(extra="ignore")

    place_id: str = Field(default="", description="地点标识")
    name: str = Field(default="", description="显示名称")
    formatted_address: str = Field(description="格式化地址")
    rating: float | None = Field(default=None, ge=0, le=5, description="评分 0-5")
    types: list[str] = Field(default_factory=list, description="有序分类标签")
    geometry: Geometry | None = None
    formatted_phone_number: str | None = None
    website: str | None = None
    opening_hours: OpeningHours | None = None

    @field_validator("formatted_address")
    @classmethod
    def _address_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("formatted_address must not be empty")
        return v

    @property
    def location(self) -> LatLng | None:
        if self.geometry is None:
            return None
        return self.geometry.location


class TextValue(BaseModel):
    """带可读文本的度量（如 "12 mins" / "5.3 km"）"""

    model_config = ConfigDict(extra="ignore")

    text: str
    value: float | None = None


class DirectionLeg(BaseModel):
    model_config = ConfigDict(extra="ignore")

    duration: TextValue
    distance: TextValue
    start_address: str = ""
    end_address: str = ""


class Direction(BaseModel):
    """路线：摘要 + 有序 legs（顺序即路线顺序，必须保留）"""

    model_config = ConfigDict(extra="ignore")

    summary: str = ""
    legs: list[DirectionLeg] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# 能力方法返回值（按 kind 区分的联合类型）
# ---------------------------------------------------------------------------


class PlaceList(BaseModel):
    kind: Literal["place_list"] = "place_list"
    places: list[Place] = Field(default_factory=list)

    def first(self) -> Place | None:
        return self.places[0] if self.places else None


class PlaceDetail(BaseModel):
    kind: Literal["place_detail"] = "place_detail"
    place: Place


class DirectionResult(BaseModel):
    kind: Literal["direction"] = "direction"
    direction: Direction

