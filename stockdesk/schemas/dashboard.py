from pydantic import BaseModel
from typing import List, Union


class DashboardCard(BaseModel):
    title: str
    value: Union[int, str]
    icon: str
    color: str


class Activity(BaseModel):
    id: str
    description: str
    timestamp: str
    type: str


class DashboardResponse(BaseModel):
    stats: List[DashboardCard]
    activities: List[Activity]
