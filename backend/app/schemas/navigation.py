"""Navigation shell schemas."""

from typing import List, Optional

from pydantic import BaseModel


class NavItem(BaseModel):
    name: str
    href: str
    active: bool = False


class NavigationRead(BaseModel):
    role: str
    items: List[NavItem]
    active_href: Optional[str] = None
    sidebar_open: bool = False


class SidebarUpdate(BaseModel):
    sidebar_open: bool
