"""
Pytest configuration and fixtures for the bookkeeping backend tests.

This module provides:
- In-memory SQLite database fixtures seeded with plans and the master chart
- Repository and service fixtures
- Factory helpers for companies, exercises, entries and invoices
- An API test client with authenticated headers
"""

import uuid
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from comptapro.config.settings import Settings, reset_settings, set_settings
from comptapro.main import app
from comptapro.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from comptapro.repositories.sqlalchemy import orm_models  # noqa: F401
from comptapro.repositories.sqlalchemy.seed import seed_reference_data
from comptapro.repositories.sqlalchemy import (
    SqlAlchemyAssetRepository,
    SqlAlchemyChartRepository,
    SqlAlchemyCompanyRepository,
    SqlAlchemyExerciseRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyJournalRepository,
    SqlAlchemyLedgerRepository,
    SqlAlchemyPayrollRepository,
    SqlAlchemyPlatformRepository,
    SqlAlchemyStockRepository,
    SqlAlchemyUserRepository,
)
from comptapro.services import (
    AdminService,
    AssetService,
    AuthEventBus,
    AuthService,
    ChartService,
    EcritureCreate,
    ExerciseService,
    FactureCreate,
    FactureLigneCreate,
    InvoicingService,
    JournalService,
    LedgerService,
    LigneCreate,
    MemberService,
    OnboardingService,
    PayrollService,
    ReportingService,
    SetupResult,
    StockService,
)
from comptapro.csv import CsvExporter
from comptapro.domain.models import (
    Compte,
    Ecriture,
    Exercice,
    Facture,
    Journal,
    StatutPiece,
    Tiers,
    TypeDocument,
    TypeTiers,
)

TEST_PASSWORD = "motdepasse"


# =============================================================================
# SETTINGS
# =============================================================================


@pytest.fixture(autouse=True)
def test_settings(tmp_path):
    """Deterministic settings; the lifespan database stays in memory."""
    reset_settings()
    reset_database()
    settings = Settings(
        database_url="sqlite:///:memory:",
        data_dir=tmp_path,
        jwt_secret_key="test-secret-key",
        log_level="WARNING",
    )
    set_settings(settings)
    yield settings
    reset_database()
    reset_settings()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    seed_session = sessionmaker(bind=engine)()
    try:
        seed_reference_data(seed_session)
    finally:
        seed_session.close()
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def company_repo(test_session) -> SqlAlchemyCompanyRepository:
    return SqlAlchemyCompanyRepository(test_session)


@pytest.fixture
def user_repo(test_session) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(test_session)


@pytest.fixture
def chart_repo(test_session) -> SqlAlchemyChartRepository:
    return SqlAlchemyChartRepository(test_session)


@pytest.fixture
def journal_repo(test_session) -> SqlAlchemyJournalRepository:
    return SqlAlchemyJournalRepository(test_session)


@pytest.fixture
def exercise_repo(test_session) -> SqlAlchemyExerciseRepository:
    return SqlAlchemyExerciseRepository(test_session)


@pytest.fixture
def ledger_repo(test_session) -> SqlAlchemyLedgerRepository:
    return SqlAlchemyLedgerRepository(test_session)


@pytest.fixture
def invoice_repo(test_session) -> SqlAlchemyInvoiceRepository:
    return SqlAlchemyInvoiceRepository(test_session)


@pytest.fixture
def asset_repo(test_session) -> SqlAlchemyAssetRepository:
    return SqlAlchemyAssetRepository(test_session)


@pytest.fixture
def payroll_repo(test_session) -> SqlAlchemyPayrollRepository:
    return SqlAlchemyPayrollRepository(test_session)


@pytest.fixture
def stock_repo(test_session) -> SqlAlchemyStockRepository:
    return SqlAlchemyStockRepository(test_session)


@pytest.fixture
def platform_repo(test_session) -> SqlAlchemyPlatformRepository:
    return SqlAlchemyPlatformRepository(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def event_bus() -> AuthEventBus:
    """Fresh auth event bus, isolated from the process-wide one."""
    return AuthEventBus()


@pytest.fixture
def auth_service(user_repo, company_repo, event_bus) -> AuthService:
    return AuthService(user_repo, company_repo, events=event_bus)


@pytest.fixture
def onboarding_service(
    company_repo, user_repo, chart_repo, journal_repo, exercise_repo
) -> OnboardingService:
    return OnboardingService(company_repo, user_repo, chart_repo, journal_repo, exercise_repo)


@pytest.fixture
def chart_service(chart_repo) -> ChartService:
    return ChartService(chart_repo)


@pytest.fixture
def journal_service(journal_repo, chart_repo) -> JournalService:
    return JournalService(journal_repo, chart_repo)


@pytest.fixture
def exercise_service(exercise_repo) -> ExerciseService:
    return ExerciseService(exercise_repo)


@pytest.fixture
def ledger_service(ledger_repo, chart_repo, journal_repo, exercise_repo) -> LedgerService:
    return LedgerService(ledger_repo, chart_repo, journal_repo, exercise_repo)


@pytest.fixture
def invoicing_service(
    invoice_repo, ledger_repo, chart_repo, journal_repo, exercise_repo
) -> InvoicingService:
    return InvoicingService(invoice_repo, ledger_repo, chart_repo, journal_repo, exercise_repo)


@pytest.fixture
def reporting_service(ledger_repo, invoice_repo, exercise_repo) -> ReportingService:
    return ReportingService(ledger_repo, invoice_repo, exercise_repo)


@pytest.fixture
def asset_service(
    asset_repo, ledger_repo, chart_repo, journal_repo, exercise_repo
) -> AssetService:
    return AssetService(asset_repo, ledger_repo, chart_repo, journal_repo, exercise_repo)


@pytest.fixture
def payroll_service(
    payroll_repo, ledger_repo, chart_repo, journal_repo, exercise_repo
) -> PayrollService:
    return PayrollService(payroll_repo, ledger_repo, chart_repo, journal_repo, exercise_repo)


@pytest.fixture
def stock_service(stock_repo) -> StockService:
    return StockService(stock_repo)


@pytest.fixture
def member_service(user_repo, company_repo, platform_repo) -> MemberService:
    return MemberService(user_repo, company_repo, platform_repo)


@pytest.fixture
def admin_service(user_repo, company_repo, ledger_repo, platform_repo) -> AdminService:
    return AdminService(user_repo, company_repo, ledger_repo, platform_repo)


@pytest.fixture
def csv_exporter(ledger_service) -> CsvExporter:
    return CsvExporter(ledger_service=ledger_service)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def company_factory(auth_service, onboarding_service) -> Callable[..., SetupResult]:
    """Factory signing up a user and setting up their company."""

    def _create_company(
        nom_entreprise: str = "Société Test",
        email: Optional[str] = None,
    ) -> SetupResult:
        if email is None:
            email = f"user-{uuid.uuid4().hex[:8]}@example.com"
        user = auth_service.sign_up(email, TEST_PASSWORD)
        return onboarding_service.setup_company(user.user_id, nom_entreprise)

    return _create_company


@pytest.fixture
def company(company_factory) -> SetupResult:
    """A set-up company with its chart, journals and current exercise."""
    return company_factory(nom_entreprise="Société Ivoirienne de Négoce")


@pytest.fixture
def entreprise_id(company) -> str:
    return company.entreprise.id_entreprise


@pytest.fixture
def exercice_2024(exercise_service, entreprise_id) -> Exercice:
    """Open calendar exercise 2024 for the company."""
    return exercise_service.create_exercice(
        entreprise_id, "Exercice 2024", date(2024, 1, 1), date(2024, 12, 31)
    )


@pytest.fixture
def compte(chart_service, entreprise_id) -> Callable[[str], Compte]:
    """Lookup of a company account by number."""

    def _compte(numero: str) -> Compte:
        return chart_service.get_account_by_numero(entreprise_id, numero)

    return _compte


@pytest.fixture
def journal(journal_repo, entreprise_id) -> Callable[[str], Journal]:
    """Lookup of a company journal by code."""

    def _journal(code: str) -> Journal:
        return journal_repo.get_by_code(entreprise_id, code)

    return _journal


@pytest.fixture
def entry_factory(
    ledger_service, entreprise_id, compte, journal
) -> Callable[..., Ecriture]:
    """Factory recording a two-line entry debit/credit by account number."""

    def _create_entry(
        debit_numero: str,
        credit_numero: str,
        montant: Decimal,
        day: date = date(2024, 3, 15),
        journal_code: str = "OD",
        libelle: str = "Opération test",
        statut: StatutPiece = StatutPiece.VALIDEE,
        credit_montant: Optional[Decimal] = None,
    ) -> Ecriture:
        return ledger_service.create_entry(entreprise_id, EcritureCreate(
            journal_id=journal(journal_code).id_journal,
            date_ecriture=day,
            libelle_operation=libelle,
            statut=statut,
            lignes=[
                LigneCreate(compte_id=compte(debit_numero).id_compte, montant_debit=montant),
                LigneCreate(
                    compte_id=compte(credit_numero).id_compte,
                    montant_credit=montant if credit_montant is None else credit_montant,
                ),
            ],
        ))

    return _create_entry


@pytest.fixture
def client_tiers(invoicing_service, entreprise_id) -> Tiers:
    return invoicing_service.create_tiers(entreprise_id, "Client Abidjan SARL", TypeTiers.CLIENT)


@pytest.fixture
def fournisseur_tiers(invoicing_service, entreprise_id) -> Tiers:
    return invoicing_service.create_tiers(entreprise_id, "Fournisseur Dakar SA", TypeTiers.FOURNISSEUR)


@pytest.fixture
def sale_factory(
    invoicing_service, entreprise_id, client_tiers, exercice_2024
) -> Callable[..., Facture]:
    """Factory for sales invoices dated in exercise 2024."""

    def _create_sale(
        prix: Decimal = Decimal("100000"),
        quantite: Decimal = Decimal("1"),
        taux_tva: Optional[Decimal] = None,
        statut: StatutPiece = StatutPiece.VALIDEE,
        day: date = date(2024, 5, 10),
        numero: Optional[str] = None,
    ) -> Facture:
        return invoicing_service.create_facture(entreprise_id, TypeDocument.VENTE, FactureCreate(
            tiers_id=client_tiers.id_tiers,
            exercice_id=exercice_2024.id_exercice,
            date_facture=day,
            numero_facture=numero,
            statut=statut,
            lignes=[FactureLigneCreate(
                description="Marchandises",
                quantite=quantite,
                prix_unitaire_ht=prix,
                taux_tva=taux_tva,
            )],
        ))

    return _create_sale


# =============================================================================
# API TEST CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def client(test_engine) -> TestClient:
    """Provide FastAPI test client with test database."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def sign_in_headers(client: TestClient, email: str, password: str = TEST_PASSWORD) -> dict[str, str]:
    """Bearer headers for an existing identity."""
    response = client.post("/auth/sign-in", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def api_user_factory(client) -> Callable[..., dict[str, str]]:
    """Factory signing up through the API and returning bearer headers."""

    def _create_user(email: Optional[str] = None, nom_entreprise: Optional[str] = "API Test SARL") -> dict[str, str]:
        if email is None:
            email = f"api-{uuid.uuid4().hex[:8]}@example.com"
        response = client.post("/auth/sign-up", json={"email": email, "password": TEST_PASSWORD})
        assert response.status_code == 201, response.text
        headers = sign_in_headers(client, email)
        if nom_entreprise is not None:
            setup = client.post("/auth/setup", json={"nom_entreprise": nom_entreprise}, headers=headers)
            assert setup.status_code == 200, setup.text
        return headers

    return _create_user


@pytest.fixture
def auth_headers(api_user_factory) -> dict[str, str]:
    """Headers of an administrator whose company is set up."""
    return api_user_factory(email="admin@example.com")


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(str(actual)) - Decimal(str(expected)))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


def api_compte_id(client: TestClient, headers: dict[str, str], numero: str) -> str:
    """ID of a company account looked up through GET /comptes."""
    response = client.get("/comptes", params={"prefix": numero}, headers=headers)
    assert response.status_code == 200, response.text
    return next(c["id_compte"] for c in response.json() if c["numero_compte"] == numero)


def api_journal_id(client: TestClient, headers: dict[str, str], code: str) -> str:
    """ID of a company journal looked up through GET /journaux."""
    response = client.get("/journaux", headers=headers)
    assert response.status_code == 200, response.text
    return next(j["id_journal"] for j in response.json() if j["code_journal"] == code)


@pytest.fixture
def api_exercice_id(client, auth_headers) -> str:
    """Exercise 2024 opened through the API for the admin@example.com company."""
    response = client.post("/exercices", json={
        "libelle": "Exercice 2024",
        "date_debut": "2024-01-01",
        "date_fin": "2024-12-31",
    }, headers=auth_headers)
    assert response.status_code == 201, response.text
    return response.json()["id_exercice"]
