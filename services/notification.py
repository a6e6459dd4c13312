import logging

import aiohttp
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

import config
from enums.order_status import OrderStatus
from exceptions import NotificationDeliveryException
from models.order import OrderDTO
from services.order import OrderService

logger = logging.getLogger(__name__)


class NotificationService:

    @staticmethod
    def build_status_email(order: OrderDTO, status: OrderStatus | str) -> dict:
        """
        SendGrid v3 mail/send payload for the order status template.

        The template receives firstName, lastName, orderId and status.
        """
        status = status.value if isinstance(status, OrderStatus) else str(status)
        return {
            "personalizations": [
                {
                    "to": [{"email": order.email}],
                    "dynamic_template_data": {
                        "firstName": order.first_name,
                        "lastName": order.last_name,
                        "orderId": order.id,
                        "status": status,
                    },
                }
            ],
            "from": {"email": config.MAIL_FROM},
            "template_id": config.SENDGRID_STATUS_TEMPLATE_ID,
        }

    @staticmethod
    async def send_order_status_email(order_id: str,
                                      status: OrderStatus | str,
                                      session: AsyncSession | Session) -> None:
        """
        Email the customer about a status change.

        Raises:
            OrderNotFoundException: unknown order
            NotificationDeliveryException: the mail API is unreachable or rejected the message
        """
        order = await OrderService.get_order(order_id, session)
        payload = NotificationService.build_status_email(order, status)
        headers = {
            "Authorization": f"Bearer {config.SENDGRID_API_KEY}",
            "Content-Type": "application/json",
        }
        try:
            async with aiohttp.ClientSession() as http:
                async with http.post(config.SENDGRID_API_URL, json=payload, headers=headers) as response:
                    if response.status >= 300:
                        body = await response.text()
                        raise NotificationDeliveryException(order_id, f"HTTP {response.status}: {body[:200]}")
        except aiohttp.ClientError as e:
            raise NotificationDeliveryException(order_id, str(e)) from e

        logger.info(f"[Notification] Status email '{payload['personalizations'][0]['dynamic_template_data']['status']}' "
                    f"sent for order {order_id}")
