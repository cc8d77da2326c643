from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from image_dashboard.dashboard.controller import Dashboard, ViewMode
from image_dashboard.dashboard.gateway_client import DisplayImage
from image_dashboard.dashboard.notifications import Notification

SKELETON_COUNT = 12

class ImageCard(BaseModel):
    id: str
    name: str
    url: str
    size_label: str
    date_label: str
    deleting: bool = False
    loaded: bool = False

class PaginationBar(BaseModel):
    current_page: int
    page_numbers: List[int]
    has_previous: bool
    has_next: bool
    summary: str

class DashboardView(BaseModel):
    view: ViewMode
    loading: bool
    skeletons: int = 0
    upload_disabled: bool
    upload_label: str
    cards: List[ImageCard] = []
    pagination: Optional[PaginationBar] = None
    notifications: List[Notification] = []

def format_size(size: int) -> str:
    return f"{size / 1000:.1f} KB"

def format_date(value: Optional[datetime]) -> str:
    return value.strftime("%m/%d/%Y") if value else ""

def to_card(dashboard: Dashboard, image: DisplayImage) -> ImageCard:
    return ImageCard(
        id=image.id,
        name=image.name,
        url=image.url,
        size_label=format_size(image.size),
        date_label=format_date(image.last_modified),
        deleting=dashboard.deleting.get(image.id, False),
        loaded=dashboard.loaded.get(image.id, False),
    )

def pagination_bar(dashboard: Dashboard) -> PaginationBar:
    count = len(dashboard.images)
    paginator = dashboard.paginator
    start, end = paginator.bounds(count)
    return PaginationBar(
        current_page=paginator.current_page,
        page_numbers=paginator.page_numbers(count),
        has_previous=paginator.has_previous,
        has_next=paginator.has_next(count),
        summary=f"Showing {min(start + 1, count)}-{end} of {count} images",
    )

def render(dashboard: Dashboard) -> DashboardView:
    """Projects the dashboard state onto what the page shows."""
    view = DashboardView(
        view=dashboard.view,
        loading=dashboard.loading,
        upload_disabled=dashboard.uploading,
        upload_label="Uploading..." if dashboard.uploading else "Upload Image",
        notifications=dashboard.notifications.items,
    )
    if dashboard.loading:
        view.skeletons = SKELETON_COUNT
        return view

    view.cards = [to_card(dashboard, image) for image in dashboard.page_items]
    view.pagination = pagination_bar(dashboard)
    return view
