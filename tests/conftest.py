import os
import socket
import sys
import textwrap
from pathlib import Path
from types import SimpleNamespace

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]

# Prefer repo sources over any installed package.
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from propsearch.data.schemas import Property  # noqa: E402


@pytest.fixture(autouse=True)
def block_network(monkeypatch):
    if os.getenv("LIVE") == "1":
        return

    real_connect = socket.socket.connect

    def guarded_connect(sock, address):
        host = address[0] if isinstance(address, tuple) else address
        if host not in ("127.0.0.1", "localhost"):
            raise RuntimeError("Network access blocked in tests")
        return real_connect(sock, address)

    monkeypatch.setattr(socket.socket, "connect", guarded_connect)


# ---------------------------------------------------------------------------
# CSV fixtures
# ---------------------------------------------------------------------------

PROJECT_CSV = """\
id,projectName,projectType,projectCategory,status,possessionDate,cityId
p1,Skyline Heights,Residential,Apartment,Ready,2024-01-01,c1
p2,Harbour View,Residential,Apartment,Under Construction,2026-06-30,c2
p3,Lonely Tower,Residential,Apartment,Ready,2025-01-01,c1
"""

ADDRESS_CSV = """\
id,projectId,fullAddress,pincode,landmark
a1,p1,"Baner Road, Pune, Maharashtra",411045,Near Mall
a2,p2,"Andheri West, Mumbai, Maharashtra",400053,Near Metro
"""

CONFIGURATION_CSV = """\
id,projectId,type,customBHK
c1,p1,3BHK,
c2,p2,2 BHK,
c3,p3,1BHK,
c4,p404,4BHK,
"""

VARIANT_CSV = """\
id,configurationId,bathrooms,floorPlanImage,carpetArea,price,propertyImages,aboutProperty
v1,c1,3,fp1.png,1200,11000000,"[""a.jpg"",""b.jpg""]",Corner unit
v2,c2,2,fp2.png,800,5000000,,Sea view
v3,c3,1,fp3.png,500,3000000,,Project has no address
v4,c4,4,fp4.png,2000,20000000,,Configuration points at a missing project
v5,c9,2,fp5.png,700,4000000,,Missing configuration
v6,c1,abc,fp6.png,1250,abc,not json,Dirty numbers
"""

TABLES = {
    "project.csv": PROJECT_CSV,
    "ProjectAddress.csv": ADDRESS_CSV,
    "ProjectConfiguration.csv": CONFIGURATION_CSV,
    "ProjectConfigurationVariant.csv": VARIANT_CSV,
}


def write_tables(directory: Path, overrides: dict | None = None) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    tables = dict(TABLES)
    tables.update(overrides or {})
    for name, content in tables.items():
        (directory / name).write_text(textwrap.dedent(content))
    return directory


@pytest.fixture
def data_dir(tmp_path) -> Path:
    return write_tables(tmp_path / "data")


# ---------------------------------------------------------------------------
# Property factory
# ---------------------------------------------------------------------------

def make_property(**overrides) -> Property:
    values = dict(
        id="v1",
        project_id="p1",
        project_name="Skyline Heights",
        status="Ready",
        possession_date="2024-01-01",
        full_address="Baner Road, Pune, Maharashtra",
        pincode="411045",
        unit_type="3BHK",
        price=11000000,
        bathrooms=3,
        carpet_area="1200",
        about_property="",
        floor_plan_image="",
        property_images=(),
    )
    values.update(overrides)
    return Property(**values)


@pytest.fixture
def pune_mumbai():
    p1 = make_property(id="P1")
    p2 = make_property(
        id="P2",
        project_id="p2",
        project_name="Harbour View",
        status="Under Construction",
        full_address="Andheri West, Mumbai, Maharashtra",
        unit_type="2BHK",
        price=5000000,
    )
    return [p1, p2]


# ---------------------------------------------------------------------------
# Fake chat-completions client
# ---------------------------------------------------------------------------

class FakeCompletions:
    def __init__(self, handler):
        self.handler = handler
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        content = self.handler(kwargs)
        if isinstance(content, Exception):
            raise content
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeClient:
    def __init__(self, handler):
        self.completions = FakeCompletions(handler)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self):
        return self.completions.calls


@pytest.fixture
def make_client():
    """Factory: make_client(parse=..., summary=...) → fake client.

    JSON-mode requests get `parse`, everything else gets `summary`. Either may
    be an Exception instance to simulate a failing endpoint.
    """
    def factory(parse="{}", summary="A short summary."):
        def handler(kwargs):
            return parse if "response_format" in kwargs else summary
        return FakeClient(handler)
    return factory
