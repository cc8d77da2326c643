import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Literal, Optional, Set, TypeVar

from image_dashboard.dashboard.gateway_client import DisplayImage, ImageGatewayClient
from image_dashboard.dashboard.notifications import NotificationCenter
from image_dashboard.dashboard.pagination import Paginator
from image_dashboard.exceptions import DashboardError
from image_dashboard.settings import Settings, settings as default_settings

log = logging.getLogger(__name__)

ViewMode = Literal["grid", "list"]
T = TypeVar("T")

class _Closed(Exception):
    """Raised internally when a gateway call outlives the dashboard."""

class Dashboard:
    """
        View state for one dashboard session.

        The bucket is the only source of truth: the list is fetched once on
        mount and again after each successful upload. Deletes remove the item
        locally without re-fetching. Changes made to the bucket by other
        sessions are not picked up until the next upload.

        The dashboard is driven as a library by whatever hosts the page;
        `image_dashboard.dashboard.views.render` turns its state into view
        models and `python -m image_dashboard.dashboard` is a terminal driver.

        Every completed operation pushes exactly one notification. After
        `close()` pending gateway calls are cancelled and late results are
        dropped.
    """

    def __init__(
        self,
        gateway: ImageGatewayClient,
        settings: Optional[Settings] = None,
        on_scroll_top: Optional[Callable[[], None]] = None,
    ):
        settings = settings or default_settings
        self.gateway = gateway
        self.on_scroll_top = on_scroll_top

        self.images: List[DisplayImage] = []
        self.loading = True
        self.uploading = False
        self.deleting: Dict[str, bool] = {}
        self.loaded: Dict[str, bool] = {}
        self.view: ViewMode = "grid"
        self.paginator = Paginator(settings.page_size)
        self.notifications = NotificationCenter(settings.notification_timeout)

        self.closed = False
        self._mounted = False
        # bumped on every list applied, so a slower, older fetch cannot win
        self._list_version = 0
        self._inflight: Set[asyncio.Future] = set()

    async def __aenter__(self) -> "Dashboard":
        await self.mount()
        return self

    async def __aexit__(self, *exc_info):
        self.close()

    # -------------------------
    # Gateway calls
    # -------------------------
    async def _call(self, call: Awaitable[T]) -> T:
        task = asyncio.ensure_future(call)
        self._inflight.add(task)
        try:
            result = await task
        except asyncio.CancelledError:
            if self.closed and task.cancelled():
                raise _Closed() from None
            raise
        finally:
            self._inflight.discard(task)
        if self.closed:
            raise _Closed()
        return result

    def _set_images(self, images: List[DisplayImage]):
        self._list_version += 1
        self.images = list(images)
        ids = {image.id for image in self.images}
        self.loaded = {k: v for k, v in self.loaded.items() if k in ids}
        self.paginator.sync(len(self.images))

    async def mount(self):
        """Initial fetch; runs once per dashboard."""
        if self._mounted or self.closed:
            return
        self._mounted = True
        self.loading = True
        version = self._list_version
        try:
            images = await self._call(self.gateway.list_images())
        except _Closed:
            return
        except DashboardError as e:
            log.error("Failed to fetch images: %s", e)
            self.notifications.error("Failed to load images")
        else:
            if self._list_version == version:
                self._set_images(images)
            else:
                log.debug("Dropping initial list, a newer one was already applied")
            self.notifications.success("Images fetched successfully")
        self.loading = False

    async def upload(self, filename: str, content: bytes, content_type: str = "application/octet-stream") -> bool:
        """
            Uploads one file, then re-fetches the whole list so the new item
            carries its server-assigned key. Ignored while another upload is
            in flight.
        """
        if self.uploading or self.closed:
            log.debug("Upload of %s ignored, dashboard busy or closed", filename)
            return False
        self.uploading = True
        try:
            return await self._upload(filename, content, content_type)
        except _Closed:
            return False
        finally:
            self.uploading = False

    async def _upload(self, filename: str, content: bytes, content_type: str) -> bool:
        try:
            await self._call(self.gateway.upload_image(filename, content, content_type))
        except DashboardError as e:
            log.error("Failed to upload %s: %s", filename, e)
            self.notifications.error("Failed to upload image")
            return False

        try:
            images = await self._call(self.gateway.list_images())
        except DashboardError as e:
            log.error("Uploaded %s but the refresh failed: %s", filename, e)
            self.notifications.error(f"Uploaded {filename} but failed to refresh images")
            return True

        self._set_images(images)
        self.notifications.success(f"Successfully uploaded {filename}")
        return True

    async def delete(self, image: DisplayImage) -> bool:
        if not image.name or self.deleting.get(image.id) or self.closed:
            return False
        self.deleting[image.id] = True
        try:
            await self._call(self.gateway.delete_image(image.name))
        except _Closed:
            return False
        except DashboardError as e:
            log.error("Failed to delete %s: %s", image.name, e)
            self.notifications.error("Failed to delete image")
            return False
        else:
            self.images = [img for img in self.images if img.id != image.id]
            self.loaded.pop(image.id, None)
            self.paginator.sync(len(self.images))
            self.notifications.success(f"Successfully deleted {image.name}")
            return True
        finally:
            self.deleting.pop(image.id, None)

    # -------------------------
    # Local interactions
    # -------------------------
    @property
    def page_items(self) -> List[DisplayImage]:
        return self.paginator.slice(self.images)

    def change_page(self, page: int):
        self.paginator.go_to(page, len(self.images))
        if self.on_scroll_top:
            self.on_scroll_top()

    def set_view(self, view: ViewMode):
        if view not in ("grid", "list"):
            raise ValueError(f"Unknown view mode: {view}")
        self.view = view

    def mark_loaded(self, image_id: str):
        self.loaded[image_id] = True

    def dismiss_notification(self, notification_id: str):
        self.notifications.dismiss(notification_id)

    def close(self):
        """Tears the session down; in-flight calls are cancelled."""
        self.closed = True
        for task in list(self._inflight):
            task.cancel()
        self.notifications.clear()
