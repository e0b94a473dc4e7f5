"""SQLAlchemy implementation of StockRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from comptapro.domain.models import Article, MouvementStock
from comptapro.repositories.sqlalchemy.orm_models import ArticleORM, MouvementStockORM


class SqlAlchemyStockRepository:
    """SQLAlchemy-backed stock repository."""

    def __init__(self, db: Session):
        self._db = db

    def create_article(self, article: Article) -> Article:
        """Persist a new article."""
        orm_article = ArticleORM(
            id_article=article.id_article,
            entreprise_id=article.entreprise_id,
            reference=article.reference,
            denomination=article.denomination,
            unite_stockage=article.unite_stockage,
            quantite_en_stock=article.quantite_en_stock,
            valeur_stock=article.valeur_stock,
        )
        self._db.add(orm_article)
        self._db.commit()
        self._db.refresh(orm_article)
        return self._to_domain(orm_article)

    def get_article(self, entreprise_id: str, id_article: str) -> Optional[Article]:
        orm_article = self._db.query(ArticleORM).filter(
            ArticleORM.entreprise_id == entreprise_id,
            ArticleORM.id_article == id_article,
        ).first()
        return self._to_domain(orm_article) if orm_article else None

    def get_article_by_reference(self, entreprise_id: str, reference: str) -> Optional[Article]:
        orm_article = self._db.query(ArticleORM).filter(
            ArticleORM.entreprise_id == entreprise_id,
            ArticleORM.reference == reference,
        ).first()
        return self._to_domain(orm_article) if orm_article else None

    def list_articles(self, entreprise_id: str) -> list[Article]:
        """List a company's articles by reference."""
        orm_articles = (
            self._db.query(ArticleORM)
            .filter(ArticleORM.entreprise_id == entreprise_id)
            .order_by(ArticleORM.reference)
            .all()
        )
        return [self._to_domain(a) for a in orm_articles]

    def record_movement(self, article: Article, mouvement: MouvementStock) -> Article:
        """Store a movement and the article's new running totals atomically."""
        orm_article = self._db.query(ArticleORM).filter(
            ArticleORM.entreprise_id == article.entreprise_id,
            ArticleORM.id_article == article.id_article,
        ).first()
        if orm_article is None:
            raise ValueError(f"Article not found: {article.id_article}")

        orm_article.quantite_en_stock = article.quantite_en_stock
        orm_article.valeur_stock = article.valeur_stock
        self._db.add(MouvementStockORM(
            id_mouvement=mouvement.id_mouvement,
            entreprise_id=mouvement.entreprise_id,
            article_id=mouvement.article_id,
            type_mouvement=mouvement.type_mouvement,
            quantite=mouvement.quantite,
            cout_unitaire=mouvement.cout_unitaire,
            valeur=mouvement.valeur,
            libelle=mouvement.libelle,
            date_mouvement=mouvement.date_mouvement,
        ))
        self._db.commit()
        self._db.refresh(orm_article)
        return self._to_domain(orm_article)

    def list_movements(self, entreprise_id: str, article_id: Optional[str] = None) -> list[MouvementStock]:
        """Movement history, most recent first."""
        query = self._db.query(MouvementStockORM).filter(MouvementStockORM.entreprise_id == entreprise_id)
        if article_id:
            query = query.filter(MouvementStockORM.article_id == article_id)
        orm_mouvements = query.order_by(MouvementStockORM.date_mouvement.desc()).all()
        return [self._mouvement_to_domain(m) for m in orm_mouvements]

    @staticmethod
    def _to_domain(orm: ArticleORM) -> Article:
        """Convert ORM model to domain model."""
        return Article(
            id_article=orm.id_article,
            entreprise_id=orm.entreprise_id,
            reference=orm.reference,
            denomination=orm.denomination,
            unite_stockage=orm.unite_stockage,
            quantite_en_stock=orm.quantite_en_stock,
            valeur_stock=orm.valeur_stock,
        )

    @staticmethod
    def _mouvement_to_domain(orm: MouvementStockORM) -> MouvementStock:
        return MouvementStock(
            id_mouvement=orm.id_mouvement,
            entreprise_id=orm.entreprise_id,
            article_id=orm.article_id,
            type_mouvement=orm.type_mouvement,
            quantite=orm.quantite,
            cout_unitaire=orm.cout_unitaire,
            valeur=orm.valeur,
            libelle=orm.libelle,
            date_mouvement=orm.date_mouvement,
        )
