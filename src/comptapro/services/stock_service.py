"""Stock articles and weighted-average cost (CMP) movements."""

import logging
import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from comptapro.core.exceptions import InsufficientStockError, NotFoundError, ValidationError
from comptapro.core.money import ZERO, round_money, to_decimal
from comptapro.core.timezone import now_local
from comptapro.domain.models import Article, MouvementStock, TypeMouvement
from comptapro.repositories.protocols import StockRepository

logger = logging.getLogger(__name__)

UNIT_COST_QUANTUM = Decimal("0.0001")


class StockService:
    """
    Service for the stock register.

    Entries add their cost to the stock value; exits are valued at the
    current CMP (valeur_stock / quantite_en_stock).
    """

    def __init__(self, stock_repo: StockRepository):
        self._stock_repo = stock_repo

    def create_article(
        self,
        entreprise_id: str,
        reference: str,
        denomination: str,
        unite_stockage: Optional[str] = None,
    ) -> Article:
        reference = (reference or "").strip()
        denomination = (denomination or "").strip()
        if not reference or not denomination:
            raise ValidationError("Référence et désignation obligatoires")
        if self._stock_repo.get_article_by_reference(entreprise_id, reference):
            raise ValidationError(f"L'article {reference} existe déjà.")
        return self._stock_repo.create_article(Article(
            id_article=str(uuid.uuid4()),
            entreprise_id=entreprise_id,
            reference=reference,
            denomination=denomination,
            unite_stockage=(unite_stockage or "").strip() or "unité",
        ))

    def get_article(self, entreprise_id: str, id_article: str) -> Article:
        article = self._stock_repo.get_article(entreprise_id, id_article)
        if not article:
            raise NotFoundError("Article", id_article)
        return article

    def list_articles(self, entreprise_id: str) -> list[Article]:
        return self._stock_repo.list_articles(entreprise_id)

    def list_mouvements(self, entreprise_id: str, article_id: Optional[str] = None) -> list[MouvementStock]:
        if article_id:
            self.get_article(entreprise_id, article_id)
        return self._stock_repo.list_movements(entreprise_id, article_id=article_id)

    def enregistrer_mouvement_stock(
        self,
        entreprise_id: str,
        article_id: str,
        type_mouvement: TypeMouvement,
        quantite: Decimal,
        cout_unitaire: Optional[Decimal] = None,
        libelle: Optional[str] = None,
    ) -> Article:
        """
        Record a stock entry or exit and update the running totals.

        Args:
            type_mouvement: entree or sortie
            quantite: Strictly positive quantity
            cout_unitaire: Unit cost of an entry; ignored for an exit

        Returns:
            The article with its new quantity and value
        """
        article = self.get_article(entreprise_id, article_id)
        type_mouvement = TypeMouvement(type_mouvement)
        quantite = to_decimal(quantite)
        if quantite <= ZERO:
            raise ValidationError("La quantité doit être positive.")

        if type_mouvement == TypeMouvement.ENTREE:
            if cout_unitaire is None or to_decimal(cout_unitaire) < ZERO:
                raise ValidationError("Le coût unitaire est obligatoire pour une entrée.")
            cout = to_decimal(cout_unitaire)
            valeur = round_money(quantite * cout)
            article.quantite_en_stock += quantite
            article.valeur_stock = round_money(article.valeur_stock + valeur)
        else:
            if quantite > article.quantite_en_stock:
                raise InsufficientStockError(
                    article.reference, str(quantite), str(article.quantite_en_stock)
                )
            cout = article.cmp
            if quantite == article.quantite_en_stock:
                valeur = article.valeur_stock
            else:
                valeur = round_money(quantite * cout)
            article.quantite_en_stock -= quantite
            article.valeur_stock = (
                ZERO if article.quantite_en_stock == ZERO
                else round_money(article.valeur_stock - valeur)
            )

        mouvement = MouvementStock(
            id_mouvement=str(uuid.uuid4()),
            entreprise_id=entreprise_id,
            article_id=article.id_article,
            type_mouvement=type_mouvement,
            quantite=quantite,
            cout_unitaire=cout.quantize(UNIT_COST_QUANTUM, rounding=ROUND_HALF_UP),
            valeur=valeur,
            libelle=(libelle or "").strip() or None,
            date_mouvement=now_local(),
        )
        updated = self._stock_repo.record_movement(article, mouvement)
        logger.info(
            "Stock %s of %s %s (new quantity %s)",
            type_mouvement.value, quantite, article.reference, updated.quantite_en_stock,
        )
        return updated
