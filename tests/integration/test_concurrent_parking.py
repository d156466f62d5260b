#!/usr/bin/env python3
"""
Concurrency tests: many threads parking and unparking against one lot.
"""

import threading
import unittest
from concurrent.futures import ThreadPoolExecutor

from multilevel_parking.application.commands import CommandParser, CommandProcessor
from multilevel_parking.application.parking_service import ParkingServiceFactory
from multilevel_parking.domain.aggregates import ParkingLot
from multilevel_parking.domain.models import Vehicle, VehicleKind


class TestConcurrentParking(unittest.TestCase):

    def test_parallel_parks_get_distinct_slots(self):
        lot = ParkingLot("LOT1", 4, 10)  # 7 MEDIUM slots per floor
        vehicles = [Vehicle(VehicleKind.CAR, f"KA-{i:03d}", "White") for i in range(40)]

        with ThreadPoolExecutor(max_workers=8) as executor:
            tickets = list(executor.map(lot.park_vehicle, vehicles))

        issued = [t for t in tickets if t is not None]
        self.assertEqual(len(issued), 28)
        self.assertEqual(tickets.count(None), 12)
        self.assertEqual(len({(t.floor_number, t.slot_number) for t in issued}), 28)
        self.assertEqual(len({t.ticket_id for t in issued}), 28)
        lot.check_invariants()

    def test_each_ticket_unparks_exactly_once(self):
        lot = ParkingLot("LOT1", 2, 6)
        ticket = lot.park_vehicle(Vehicle(VehicleKind.BIKE, "KA-01", "Red"))
        barrier = threading.Barrier(6)
        outcomes = []
        outcomes_lock = threading.Lock()

        def release():
            barrier.wait()
            result = lot.unpark_vehicle(ticket.ticket_id)
            with outcomes_lock:
                outcomes.append(result.valid)

        threads = [threading.Thread(target=release) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(sorted(outcomes), [False] * 5 + [True])
        self.assertEqual(lot.active_ticket_count, 0)

    def test_mixed_traffic_through_processor(self):
        service = ParkingServiceFactory.create_default_service()
        parser = CommandParser()
        processor = CommandProcessor(service)
        processor.process(parser.parse("create_parking_lot LOT1 3 8"))

        def cycle(worker):
            for i in range(20):
                line = processor.process(
                    parser.parse(f"park_vehicle car W{worker}-{i} Blue")
                ).lines[0]
                if line.startswith("Parked vehicle. Ticket ID: "):
                    ticket_id = line.split(": ", 1)[1]
                    processor.process(parser.parse(f"unpark_vehicle {ticket_id}"))

        with ThreadPoolExecutor(max_workers=4) as executor:
            list(executor.map(cycle, range(4)))

        service.parking_lot.check_invariants()
        status = service.get_status()
        self.assertEqual(status.active_tickets, 0)
        self.assertEqual(status.by_category["MEDIUM"].free, 15)


if __name__ == "__main__":
    unittest.main(verbosity=2)
