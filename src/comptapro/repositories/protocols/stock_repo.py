"""Stock repository protocol."""

from typing import Protocol, Optional

from comptapro.domain.models import Article, MouvementStock


class StockRepository(Protocol):
    """Interface for articles and stock movements."""

    def create_article(self, article: Article) -> Article:
        ...

    def get_article(self, entreprise_id: str, id_article: str) -> Optional[Article]:
        ...

    def get_article_by_reference(self, entreprise_id: str, reference: str) -> Optional[Article]:
        ...

    def list_articles(self, entreprise_id: str) -> list[Article]:
        ...

    def record_movement(self, article: Article, mouvement: MouvementStock) -> Article:
        """Store a movement together with the article's new totals."""
        ...

    def list_movements(self, entreprise_id: str, article_id: Optional[str] = None) -> list[MouvementStock]:
        ...
