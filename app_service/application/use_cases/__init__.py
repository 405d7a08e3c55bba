"""
Use Cases
=========

One class per business operation. Discoverable when the class name ends in
"Case" and it implements an inbound port, e.g.

    class PlaceOrderCase(OrderPlacer):
        def __init__(self, orders: OrderRepository):
            ...
"""
