"""Minimal example demonstrating reqlog request logging."""

from __future__ import annotations

import uuid

import reqlog


def main() -> None:
    reqlog.configure(
        {
            "formatter": {"separator": " ;"},
            "logging": {"level": "DEBUG", "stream": "stdout"},
        }
    )

    for order_id in range(1, 4):
        logger = reqlog.get_request_logger("examples.orders", request_id=uuid.uuid4().hex, app="reqlog-demo")
        logger.incoming("POST /orders")
        logger.add_fields(order_id=order_id, total=order_id * 19.99)
        logger.handling("processed order", extra={"items": {"sku": f"A-{order_id}", "qty": order_id}})
        logger.outgoing("201 Created")


if __name__ == "__main__":
    main()
