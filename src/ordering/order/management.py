"""Order administration — status/notes updates and hard delete."""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrder:
    """Partial update: only the supplied fields change."""

    order_id = Identifier(required=True)
    status = String(max_length=20)
    notes = Text()


@ordering.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class ManageOrderHandler:
    @handle(UpdateOrder)
    def update_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if command.status is not None:
            order.change_status(command.status)
        if command.notes is not None:
            order.update_notes(command.notes)

        repo.add(order)

    @handle(DeleteOrder)
    def delete_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        # Line items go first so no orphaned rows survive the header
        order.discard()
        repo.add(order)
        repo._dao.delete(order)

        logger.info("order_deleted", order_id=str(order.id), order_number=order.order_number)
