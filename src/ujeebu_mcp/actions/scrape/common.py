"""Options shared by the scrape operations."""
from __future__ import annotations

from ...schema import Option, Property, displayed_for

RESOURCE = "scrape"

WAIT_UNTIL = (
    Option("Load", "load"),
    Option("DOM Content Loaded", "domcontentloaded"),
    Option("Network Idle", "networkidle"),
    Option("Commit", "commit"),
)

COMMON_SCRAPE_OPTIONS: tuple[Property, ...] = (
    Property("js", "Enable JavaScript", "boolean", True, description="Whether to execute JavaScript on the page"),
    Property("timeout", "Timeout", "number", 60, description="Maximum number of seconds before request timeout"),
    Property("js_timeout", "JS Timeout", "number", 30, description="Seconds to wait for JavaScript to render"),
    Property(
        "wait_for", "Wait For", "string", "",
        placeholder="#element or 5000",
        description="CSS selector to wait for, or milliseconds to wait",
    ),
    Property(
        "wait_for_timeout", "Wait For Timeout", "number", 30000,
        description="Timeout in milliseconds for the wait_for parameter",
    ),
    Property(
        "wait_until", "Wait Until", "options", "load",
        options=WAIT_UNTIL,
        description="When to consider page load complete",
    ),
    Property("useragent", "Custom User Agent", "string", "", placeholder="Mozilla/5.0..."),
    Property("cookies", "Cookies", "string", "", placeholder="name1=value1; name2=value2"),
    Property(
        "device", "Device", "options", "desktop",
        options=(Option("Desktop", "desktop"), Option("Mobile", "mobile")),
        description="Type of device to emulate",
    ),
    Property("window_width", "Window Width", "number", 1920, description="Browser viewport width in pixels"),
    Property("window_height", "Window Height", "number", 1080, description="Browser viewport height in pixels"),
    Property("block_ads", "Block Ads", "boolean", False),
    Property("block_resources", "Block Resources", "boolean", False, description="Whether to block images, CSS, and fonts"),
)

SCROLL_OPTIONS: tuple[Property, ...] = (
    Property("scroll_down", "Scroll Down", "boolean", False),
    Property("scroll_wait", "Scroll Wait", "number", 100, description="Wait time in milliseconds between scroll actions"),
    Property(
        "progressive_scroll", "Progressive Scroll", "boolean", False,
        description="Whether to keep scrolling until page height stops increasing",
    ),
    Property("scroll_percent", "Scroll Percent", "number", 100, description="Percentage of the page to scroll (0-100)"),
    Property("scroll_to_selector", "Scroll To Selector", "string", "", placeholder="#footer"),
)

PROXY_OPTIONS: tuple[Property, ...] = (
    Property(
        "proxy_type", "Proxy Type", "options", "rotating",
        options=(
            Option("Advanced", "advanced"),
            Option("Custom", "custom"),
            Option("Mobile", "mobile"),
            Option("Premium", "premium"),
            Option("Residential", "residential"),
            Option("Rotating", "rotating"),
        ),
    ),
    Property(
        "proxy_country", "Proxy Country", "string", "US",
        placeholder="US, UK, DE",
        description="ISO 3166-1 alpha-2 country code for premium proxy",
    ),
    Property(
        "auto_proxy", "Auto Proxy", "boolean", False,
        description="Whether to try different proxy types until content is retrieved",
    ),
    Property(
        "session_id", "Session ID", "string", "",
        placeholder="mysession123",
        description="Alphanumeric ID (1-16 chars) for persistent proxy sessions (30 min)",
    ),
    Property("custom_proxy", "Custom Proxy URL", "string", "", placeholder="http://proxy.example.com:8080"),
    Property("custom_proxy_username", "Custom Proxy Username", "string", ""),
    Property("custom_proxy_password", "Custom Proxy Password", "string", "", secret=True),
)

ALL_SCRAPE_OPTIONS = COMMON_SCRAPE_OPTIONS + SCROLL_OPTIONS + PROXY_OPTIONS


def url_property(operation: str, description: str, placeholder: str = "https://example.com") -> Property:
    return Property(
        "url", "URL", "string", "",
        required=True,
        placeholder=placeholder,
        description=description,
        show=displayed_for(RESOURCE, operation),
    )


def options_property(operation: str) -> Property:
    return Property(
        "options", "Options", "collection", {},
        options=ALL_SCRAPE_OPTIONS,
        show=displayed_for(RESOURCE, operation),
    )
