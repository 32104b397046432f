"""API test harness — the app with every port replaced by an in-memory fake."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from sitebuilder.application.services import (
    BusinessProfileStore,
    ContentGenerationGateway,
    EditorServices,
    EditorSessionManager,
    ImageQueryBuilder,
    ImageService,
    PersistenceFacade,
    SectionCatalog,
    WebsiteGenerationService,
    WebsiteService,
)
from sitebuilder.infrastructure.dependencies import (
    get_business_profile_store,
    get_content_gateway,
    get_editor_services,
    get_editor_session_manager,
    get_image_service,
    get_persistence_facade,
    get_section_catalog,
    get_website_generation_service,
    get_website_service,
)
from sitebuilder.main import app

from fakes import FakeImageProvider, FakeSiteRepository, FakeUserStateRepository, seeded_rng


class ApiHarness:
    def __init__(self):
        self.state_repo = FakeUserStateRepository()
        self.site_repo = FakeSiteRepository()
        self.images = FakeImageProvider()
        self.image_service = ImageService(self.images, ImageQueryBuilder(seeded_rng()))
        self.gateway = ContentGenerationGateway(None, "test-model")
        self.persistence = PersistenceFacade(self.state_repo)
        self.catalog = SectionCatalog.from_yaml(image_service=self.image_service)
        self.profiles = BusinessProfileStore(self.state_repo)
        self.generator = WebsiteGenerationService(self.gateway, self.image_service)
        self.manager = EditorSessionManager(transition_ms=0)
        self.websites = WebsiteService(self.site_repo)

    def install(self) -> None:
        services = EditorServices(
            persistence=self.persistence,
            catalog=self.catalog,
            image_service=self.image_service,
            gateway=self.gateway,
        )
        app.dependency_overrides.update({
            get_content_gateway: lambda: self.gateway,
            get_image_service: lambda: self.image_service,
            get_section_catalog: lambda: self.catalog,
            get_persistence_facade: lambda: self.persistence,
            get_business_profile_store: lambda: self.profiles,
            get_website_generation_service: lambda: self.generator,
            get_editor_session_manager: lambda: self.manager,
            get_editor_services: lambda: services,
            get_website_service: lambda: self.websites,
        })


@pytest.fixture
def harness():
    h = ApiHarness()
    h.install()
    yield h
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(harness):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
