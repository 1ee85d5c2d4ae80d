"""Transaction engine domain service.

Each operation validates every precondition first, then applies the ledger,
promotion and event pool changes together with the transaction rows inside
one atomic unit. Inside the unit only race losses (unique or conditional
update guards) can fail, and they undo the whole unit.
"""

import math
from collections.abc import Sequence
from typing import Optional
from uuid import uuid4

import logfire

from points.domain.error import (
    AlreadyProcessedError,
    InsufficientEventPointsError,
    InsufficientPointsError,
    InvalidTransactionKindError,
    NoGuestsError,
    NotAGuestError,
    NotFoundError,
    NotVerifiedError,
    RecipientNotVerifiedError,
    ValidationError,
)
from points.domain.model import (
    AdjustmentTransaction,
    EventTransaction,
    PurchaseTransaction,
    RedemptionTransaction,
    Transaction,
    TransferTransaction,
    utc_now,
)
from points.domain.repository import (
    TransactionFilter,
    TransactionRepository,
    UnitOfWork,
)
from points.domain.value import (
    Actor,
    EventId,
    PromotionId,
    Role,
    TransactionId,
    TransactionKind,
    UserId,
    Utorid,
)

from .base import Service
from .event_service import EventService
from .ledger_service import LedgerService
from .promotion_service import PromotionService
from .role_gate import RoleGate
from .user_service import UserService


class TransactionService(Service):
    """Domain service creating and mutating ledger transactions."""

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        user_service: UserService,
        ledger_service: LedgerService,
        promotion_service: PromotionService,
        event_service: EventService,
        role_gate: RoleGate,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize transaction service.

        Args:
            transaction_repository: Transaction repository
            user_service: User domain service
            ledger_service: Points ledger
            promotion_service: Promotion catalog
            event_service: Event points pools
            role_gate: Role checks
            unit_of_work: Atomic unit factory
        """
        self.transaction_repository = transaction_repository
        self.user_service = user_service
        self.ledger_service = ledger_service
        self.promotion_service = promotion_service
        self.event_service = event_service
        self.role_gate = role_gate
        self.unit_of_work = unit_of_work

    async def get_transaction(
        self, actor: Actor, transaction_id: TransactionId
    ) -> Transaction:
        """Get a transaction visible to the actor.

        Cashiers and above see every transaction; other users only their own.

        Raises:
            NotFoundError: If transaction not found
            ForbiddenError: If the actor may not see it
        """
        with logfire.span(
            "transaction_service.get_transaction", transaction_id=str(transaction_id)
        ):
            transaction = await self._get(transaction_id)
            self.role_gate.require_self_or(actor, transaction.user_id, Role.CASHIER)
            return transaction

    async def list_user_transactions(
        self, actor: Actor, kind: Optional[TransactionKind] = None
    ) -> list[Transaction]:
        """List the actor's own transactions, newest first."""
        with logfire.span(
            "transaction_service.list_user_transactions",
            user_id=str(actor.user_id),
            kind=kind.value if kind else None,
        ):
            transactions = await self.transaction_repository.find_by_user(
                actor.user_id, kind
            )
            logfire.info(
                "Transactions listed",
                user_id=str(actor.user_id),
                count=len(transactions),
            )
            return transactions

    async def list_transactions(
        self,
        actor: Actor,
        filters: TransactionFilter,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[Transaction], int]:
        """Browse the whole ledger.

        Args:
            actor: Caller (manager or above)
            filters: Match criteria
            limit: Page size
            offset: Number of matching transactions to skip

        Returns:
            The page of transactions, newest first, and the total match count

        Raises:
            ForbiddenError: If the actor is below manager
        """
        with logfire.span(
            "transaction_service.list_transactions",
            filters=filters.model_dump(mode="json", exclude_none=True),
            limit=limit,
            offset=offset,
        ):
            self.role_gate.require(actor, Role.MANAGER)
            transactions = await self.transaction_repository.find_all(
                filters, limit, offset
            )
            total = await self.transaction_repository.count(filters)
            logfire.info("Ledger browsed", count=len(transactions), total=total)
            return transactions, total

    async def create_purchase(
        self,
        actor: Actor,
        utorid: Utorid,
        spent: float,
        promotion_ids: Sequence[PromotionId] = (),
        remark: str = "",
    ) -> PurchaseTransaction:
        """Record a purchase and credit the points it earns.

        Automatic promotions apply by themselves; manual ones are applied by
        ID, and one-time manual promotions are consumed. The row inherits the
        cashier's ``suspicious`` flag; a suspicious row is stored with its
        computed amount but does not credit the customer until un-flagged.

        Args:
            actor: Cashier recording the purchase
            utorid: Customer's UTORid
            spent: Amount spent, positive
            promotion_ids: Manually applied promotions
            remark: Free text

        Returns:
            The purchase transaction

        Raises:
            ForbiddenError: If the actor is below cashier
            ValidationError: If ``spent`` is not a positive number
            NotFoundError: If the customer or cashier is not found
            InvalidPromotionError: If a manual promotion cannot be applied
            PromotionAlreadyUsedError: If a one-time promotion was consumed
        """
        with logfire.span(
            "transaction_service.create_purchase",
            utorid=utorid.root,
            spent=spent,
            cashier_id=str(actor.user_id),
        ):
            self.role_gate.require(actor, Role.CASHIER)
            if not math.isfinite(spent) or spent <= 0:
                raise ValidationError("Spent amount must be a positive number")

            customer = await self.user_service.get_by_utorid(utorid)
            cashier = await self.user_service.get_by_id(actor.user_id)
            now = utc_now()

            automatic = await self.promotion_service.active_automatic_promotions(
                spent, now
            )
            manual = await self.promotion_service.resolve_manual_promotions(
                promotion_ids, spent, now
            )
            await self.promotion_service.ensure_unused(customer.id, manual)

            applied = list({p.id: p for p in automatic + manual}.values())
            earned = self.promotion_service.calculate_points(spent, applied)

            purchase = PurchaseTransaction(
                id=TransactionId(uuid4()),
                user_id=customer.id,
                amount=earned,
                suspicious=cashier.suspicious,
                remark=remark,
                created_by=actor.user_id,
                created_at=now,
                spent=spent,
                promotion_ids=tuple(p.id for p in applied),
            )

            async with self.unit_of_work.atomic():
                for promotion in manual:
                    if promotion.is_one_time:
                        await self.promotion_service.mark_one_time_used(
                            customer.id, promotion.id
                        )
                saved = await self.transaction_repository.save(purchase)
                if not purchase.suspicious:
                    await self.ledger_service.adjust_balance(customer.id, earned)

            logfire.info(
                "Purchase recorded",
                transaction_id=str(saved.id),
                user_id=str(customer.id),
                earned=earned,
                suspicious=saved.suspicious,
                promotions=len(applied),
            )
            return saved

    async def create_adjustment(
        self,
        actor: Actor,
        utorid: Utorid,
        amount: int,
        related_transaction_id: Optional[TransactionId] = None,
        promotion_ids: Sequence[PromotionId] = (),
        remark: str = "",
    ) -> AdjustmentTransaction:
        """Apply a manual correction to a user's balance.

        Adjustments are applied immediately and are never held as suspicious.

        Raises:
            ForbiddenError: If the actor is below manager
            NotFoundError: If the user or related transaction is not found
            InvalidPromotionError: If a promotion ID is unknown
            InsufficientPointsError: If the balance would go negative
        """
        with logfire.span(
            "transaction_service.create_adjustment",
            utorid=utorid.root,
            amount=amount,
            manager_id=str(actor.user_id),
        ):
            self.role_gate.require(actor, Role.MANAGER)
            user = await self.user_service.get_by_utorid(utorid)

            if related_transaction_id is not None:
                await self._get(related_transaction_id)
            if promotion_ids:
                await self.promotion_service.ensure_promotions_exist(promotion_ids)

            if user.points + amount < 0:
                raise InsufficientPointsError(str(user.id), user.points, -amount)

            adjustment = AdjustmentTransaction(
                id=TransactionId(uuid4()),
                user_id=user.id,
                amount=amount,
                remark=remark,
                created_by=actor.user_id,
                related_transaction_id=related_transaction_id,
                promotion_ids=tuple(dict.fromkeys(promotion_ids)),
            )

            async with self.unit_of_work.atomic():
                saved = await self.transaction_repository.save(adjustment)
                await self.ledger_service.adjust_balance(user.id, amount)

            logfire.info(
                "Adjustment applied",
                transaction_id=str(saved.id),
                user_id=str(user.id),
                amount=amount,
            )
            return saved

    async def create_redemption(
        self, actor: Actor, amount: int, remark: str = ""
    ) -> RedemptionTransaction:
        """Request to redeem points; nothing is debited until processed.

        Raises:
            ValidationError: If ``amount`` is not positive
            NotVerifiedError: If the actor is not verified
            InsufficientPointsError: If the actor's balance is below ``amount``
        """
        with logfire.span(
            "transaction_service.create_redemption",
            user_id=str(actor.user_id),
            amount=amount,
        ):
            if amount <= 0:
                raise ValidationError("Redemption amount must be positive")

            user = await self.user_service.get_by_id(actor.user_id)
            if not user.verified:
                raise NotVerifiedError(str(user.id))
            if user.points < amount:
                raise InsufficientPointsError(str(user.id), user.points, amount)

            redemption = RedemptionTransaction(
                id=TransactionId(uuid4()),
                user_id=user.id,
                amount=0,
                remark=remark,
                created_by=user.id,
                redeemed=amount,
            )
            saved = await self.transaction_repository.save(redemption)
            logfire.info(
                "Redemption requested",
                transaction_id=str(saved.id),
                user_id=str(user.id),
                redeemed=amount,
            )
            return saved

    async def process_redemption(
        self, actor: Actor, transaction_id: TransactionId
    ) -> RedemptionTransaction:
        """Debit a pending redemption from its owner's balance.

        Of two concurrent calls exactly one succeeds; the other fails with
        ``AlreadyProcessedError``.

        Raises:
            ForbiddenError: If the actor is below cashier
            NotFoundError: If transaction not found
            InvalidTransactionKindError: If it is not a redemption
            AlreadyProcessedError: If it was already processed
            InsufficientPointsError: If the owner can no longer cover it
        """
        with logfire.span(
            "transaction_service.process_redemption",
            transaction_id=str(transaction_id),
            cashier_id=str(actor.user_id),
        ):
            self.role_gate.require(actor, Role.CASHIER)
            transaction = await self._get(transaction_id)
            if not isinstance(transaction, RedemptionTransaction):
                raise InvalidTransactionKindError(
                    str(transaction_id),
                    TransactionKind.REDEMPTION.value,
                    transaction.kind.value,
                )
            if transaction.is_processed:
                raise AlreadyProcessedError(str(transaction_id))

            balance = await self.ledger_service.balance(transaction.user_id)
            if balance < transaction.redeemed:
                raise InsufficientPointsError(
                    str(transaction.user_id), balance, transaction.redeemed
                )

            async with self.unit_of_work.atomic():
                processed = await self.transaction_repository.mark_processed(
                    transaction_id, actor.user_id, utc_now()
                )
                if processed is None:
                    logfire.warn(
                        "Redemption processed concurrently",
                        transaction_id=str(transaction_id),
                    )
                    raise AlreadyProcessedError(str(transaction_id))
                await self.ledger_service.adjust_balance(
                    processed.user_id, -processed.redeemed
                )

            logfire.info(
                "Redemption processed",
                transaction_id=str(transaction_id),
                user_id=str(processed.user_id),
                redeemed=processed.redeemed,
            )
            return processed

    async def create_transfer(
        self,
        actor: Actor,
        recipient_id: UserId,
        amount: int,
        remark: str = "",
    ) -> tuple[TransferTransaction, TransferTransaction]:
        """Move points from the actor to another verified user.

        Writes one row per side and both balance changes in one unit.
        Transferring to oneself is allowed and nets to zero.

        Returns:
            The sender's row and the recipient's row

        Raises:
            ValidationError: If ``amount`` is not positive
            NotVerifiedError: If the sender is not verified
            InsufficientPointsError: If the sender's balance is below ``amount``
            NotFoundError: If the recipient is not found
            RecipientNotVerifiedError: If the recipient is not verified
        """
        with logfire.span(
            "transaction_service.create_transfer",
            sender_id=str(actor.user_id),
            recipient_id=str(recipient_id),
            amount=amount,
        ):
            if amount <= 0:
                raise ValidationError("Transfer amount must be positive")

            sender = await self.user_service.get_by_id(actor.user_id)
            if not sender.verified:
                raise NotVerifiedError(str(sender.id))
            if sender.points < amount:
                raise InsufficientPointsError(str(sender.id), sender.points, amount)

            recipient = await self.user_service.get_by_id(recipient_id)
            if not recipient.verified:
                raise RecipientNotVerifiedError(str(recipient.id))

            now = utc_now()
            outgoing = TransferTransaction(
                id=TransactionId(uuid4()),
                user_id=sender.id,
                amount=-amount,
                remark=remark,
                created_by=sender.id,
                created_at=now,
                counterpart_id=recipient.id,
            )
            incoming = TransferTransaction(
                id=TransactionId(uuid4()),
                user_id=recipient.id,
                amount=amount,
                remark=remark,
                created_by=sender.id,
                created_at=now,
                counterpart_id=sender.id,
            )

            async with self.unit_of_work.atomic():
                sent = await self.transaction_repository.save(outgoing)
                received = await self.transaction_repository.save(incoming)
                await self.ledger_service.adjust_balance(sender.id, -amount)
                await self.ledger_service.adjust_balance(recipient.id, amount)

            logfire.info(
                "Transfer completed",
                sender_id=str(sender.id),
                recipient_id=str(recipient.id),
                amount=amount,
            )
            return sent, received

    async def award_event_points(
        self,
        actor: Actor,
        event_id: EventId,
        amount: int,
        utorid: Optional[Utorid] = None,
        remark: Optional[str] = None,
    ) -> list[EventTransaction]:
        """Award points from an event's pool to one guest or to all guests.

        With ``utorid`` only that guest is awarded; without it every guest
        receives ``amount`` and the pool is drawn once for the total.
        Awarded guests are confirmed.

        Returns:
            One transaction per awarded guest

        Raises:
            ValidationError: If ``amount`` is not positive
            NotFoundError: If the event is not found
            ForbiddenError: If the actor is neither a manager nor an organizer
            NotAGuestError: If no such user is on the guest list
            NoGuestsError: If awarding all guests of an event without guests
            InsufficientEventPointsError: If the pool cannot cover the award
        """
        with logfire.span(
            "transaction_service.award_event_points",
            event_id=str(event_id),
            amount=amount,
            utorid=utorid.root if utorid else None,
        ):
            if amount <= 0:
                raise ValidationError("Award amount must be positive")

            event = await self.event_service.get_event(event_id)
            organizers = await self.event_service.organizer_ids(event_id)
            self.role_gate.require_manager_or_organizer(actor, organizers)

            if utorid is not None:
                user = await self.user_service.find_by_utorid(utorid)
                if user is None or not await self.event_service.find_guest(
                    event_id, user.id
                ):
                    raise NotAGuestError(str(event_id), utorid.root)
                recipients = [user.id]
            else:
                guests = await self.event_service.guests(event_id)
                if not guests:
                    raise NoGuestsError(str(event_id))
                recipients = [guest.user_id for guest in guests]

            total = amount * len(recipients)
            if event.points_remain < total:
                raise InsufficientEventPointsError(
                    str(event_id), event.points_remain, total
                )

            now = utc_now()
            awards = [
                EventTransaction(
                    id=TransactionId(uuid4()),
                    user_id=recipient,
                    amount=amount,
                    remark=remark if remark is not None else event.name,
                    created_by=actor.user_id,
                    created_at=now,
                    event_id=event_id,
                )
                for recipient in recipients
            ]

            async with self.unit_of_work.atomic():
                saved = []
                for award in awards:
                    saved.append(await self.transaction_repository.save(award))
                    await self.ledger_service.adjust_balance(award.user_id, amount)
                await self.event_service.draw(event_id, total)
                await self.event_service.confirm_guests(event_id, recipients)

            logfire.info(
                "Event points awarded",
                event_id=str(event_id),
                guests=len(recipients),
                total=total,
            )
            return saved

    async def set_suspicious(
        self, actor: Actor, transaction_id: TransactionId, suspicious: bool
    ) -> Transaction:
        """Flag or un-flag a transaction, retroactively moving its points.

        Flagging debits the row's amount from the affected user and
        un-flagging credits it back. Setting the current value is a no-op.

        Raises:
            ForbiddenError: If the actor is below manager
            NotFoundError: If transaction not found
            InsufficientPointsError: If flagging would overdraw the user
        """
        with logfire.span(
            "transaction_service.set_suspicious",
            transaction_id=str(transaction_id),
            suspicious=suspicious,
        ):
            self.role_gate.require(actor, Role.MANAGER)
            transaction = await self._get(transaction_id)
            if transaction.suspicious == suspicious:
                return transaction

            async with self.unit_of_work.atomic():
                updated = await self.transaction_repository.set_suspicious(
                    transaction_id, suspicious
                )
                if updated is None:
                    # Another request flipped it first and applied the delta.
                    return await self._get(transaction_id)
                delta = -updated.amount if suspicious else updated.amount
                if delta:
                    await self.ledger_service.adjust_balance(updated.user_id, delta)

            logfire.info(
                "Suspicious flag changed",
                transaction_id=str(transaction_id),
                suspicious=suspicious,
                delta=delta,
            )
            return updated

    async def _get(self, transaction_id: TransactionId) -> Transaction:
        transaction = await self.transaction_repository.find_by_id(transaction_id)
        if not transaction:
            logfire.warn("Transaction not found", transaction_id=str(transaction_id))
            raise NotFoundError("Transaction", str(transaction_id))
        return transaction
