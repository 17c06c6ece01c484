"""Synthetic homepage / ondemand documents shared by the test suite."""

import base64

import pytest

KEY = bytes(range(48))
KEY_B64 = base64.b64encode(KEY).decode()

ONDEMAND_HASH = "5c0e8a2b"
ONDEMAND_URL = "https://abs.twimg.com/responsive-web/client-web/ondemand.s.5c0e8a2ba.js"

# key[5] % 4 == 1 selects frame 1, key[2] % 16 == 2 selects its third row,
# key[16] % 16 == 0 pins the animation at t=0
FRAMES = [
    [[1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11], [12, 13, 14, 15, 16, 17, 18, 19, 20, 21, 22]],
    [
        [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
        [9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9],
        [255, 16, 10, 200, 100, 50, 128, 64, 32, 192, 96],
    ],
]
ANIMATION_KEY = "ff10a100100"

ONDEMAND_JS = (
    '"use strict";(self.webpackChunk_twitter_responsive_web=self.webpackChunk_twitter_responsive_web||[])'
    ".push([[2190],{12345:(t,e,n)=>{n.d(e,{default:()=>o});"
    "const r=parseInt(e[2], 16),a=parseInt(e[16], 16)*parseInt(e[17],16)*parseInt(e[18], 16);"
    "function o(){return r+a}}}]);"
)

PATH = "/i/api/graphql/abc123/UserByScreenName"
TIMESTAMP = 100000000
GOLDEN_RANDOM = 90
GOLDEN = (
    "WlpbWFleX1xdUlNQUVZXVFVKS0hJTk9MTUJDQEFGR0RFent4eX5/fH1yc3Bxdnd0dVq7r19JmjWo4k/LERwWCn6QppF8WQ"
)

# key[10..12] % 16 = 10, 11, 12 -> 1320 ms, part-way through the curve
MIDWAY_ONDEMAND_JS = ONDEMAND_JS.replace("e[16]", "e[10]").replace("e[17]", "e[11]").replace("e[18]", "e[12]")
MIDWAY_ANIMATION_KEY = "ff00047ae147ae147b0f5c28f5c28f5c0f5c28f5c28f5c047ae147ae147b00"
MIDWAY_GOLDEN = (
    "WlpbWFleX1xdUlNQUVZXVFVKS0hJTk9MTUJDQEFGR0RFent4eX5/fH1yc3Bxdnd0dVq7r1+tSthBlr5Jf73WU+QKsbEWWQ"
)


def frame_svg(number: int, rows) -> str:
    d = "M 10,30 C" + " C".join(" " + ",".join(str(v) for v in row) for row in rows)
    return (
        f'<svg id="loading-x-anim-{number}" viewBox="0 0 400 400">'
        '<g><path fill="#1d9bf0" d="M 0,0 L 400,400"/>'
        f'<path fill="#ffffff" d="{d}"/></g></svg>'
    )


def build_home_page(key_b64=KEY_B64, frames=FRAMES, ondemand_hashes=(ONDEMAND_HASH,)) -> str:
    parts = ["<!DOCTYPE html><html><head>"]
    if key_b64 is not None:
        parts.append(f'<meta name="twitter-site-verification" content="{key_b64}"/>')
    parts.append("</head><body><div id=\"react-root\">")
    for number, rows in enumerate(frames):
        parts.append(frame_svg(number, rows))
    parts.append("</div><script>window.__SCRIPTS_LOADED__={};var chunks={")
    parts.append(",".join(f'"ondemand.s":"{h}"' for h in ondemand_hashes))
    parts.append("};</script></body></html>")
    return "".join(parts)


@pytest.fixture
def make_home_page():
    return build_home_page


@pytest.fixture
def home_html() -> str:
    return build_home_page()


@pytest.fixture
def ondemand_js() -> str:
    return ONDEMAND_JS


class FakeHttp:
    """Stand-in transport: maps url -> (status, body) or an exception."""

    def __init__(self, routes: dict):
        self.routes = routes
        self.calls = []

    def get(self, url):
        self.calls.append(url)
        result = self.routes[url]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def fake_http(home_html, ondemand_js):
    return FakeHttp({
        "https://x.com": (200, home_html),
        ONDEMAND_URL: (200, ondemand_js),
    })
