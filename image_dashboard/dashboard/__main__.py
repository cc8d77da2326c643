"""Terminal driver for the dashboard.

Usage:
  python -m image_dashboard.dashboard                      # list page 1
  python -m image_dashboard.dashboard --page 2 --view list
  python -m image_dashboard.dashboard --upload cat.png
  python -m image_dashboard.dashboard --delete <key>
"""
import argparse
import asyncio
import logging
import mimetypes
from pathlib import Path
from typing import List, Optional

from image_dashboard.dashboard.controller import Dashboard
from image_dashboard.dashboard.gateway_client import ImageGatewayClient
from image_dashboard.dashboard.views import DashboardView, render
from image_dashboard.settings import settings


def print_view(view: DashboardView):
    for card in view.cards:
        marker = "*" if card.deleting else "-"
        print(f"  {marker} {card.name}  {card.size_label}  {card.date_label}  {card.url}")
    if view.pagination:
        pages = " ".join(
            f"[{n}]" if n == view.pagination.current_page else str(n)
            for n in view.pagination.page_numbers
        )
        print(f"{view.pagination.summary}   {pages}")
    for notification in view.notifications:
        print(f"({notification.type}) {notification.message}")


async def run(args) -> int:
    gateway = ImageGatewayClient(settings)
    try:
        async with Dashboard(gateway, settings=settings) as dashboard:
            if args.upload:
                path = Path(args.upload)
                content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
                await dashboard.upload(path.name, path.read_bytes(), content_type)
            if args.delete:
                target = next((i for i in dashboard.images if i.name == args.delete), None)
                if target is None:
                    print(f"No image named {args.delete}")
                    return 1
                await dashboard.delete(target)
            dashboard.set_view(args.view)
            dashboard.change_page(args.page)
            print_view(render(dashboard))
            return 1 if any(n.type == "error" for n in dashboard.notifications.items) else 0
    finally:
        await gateway.aclose()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Browse the image bucket through the gateway")
    parser.add_argument("--page", type=int, default=1, help="Page to show")
    parser.add_argument("--view", choices=["grid", "list"], default="grid")
    parser.add_argument("--upload", metavar="PATH", help="Upload a file before listing")
    parser.add_argument("--delete", metavar="KEY", help="Delete an image by its storage key")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
