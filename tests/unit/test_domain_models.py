#!/usr/bin/env python3
"""
Domain Layer Unit Tests

Tests for vehicles, slots, floors and the floor layout.
"""

import unittest

from multilevel_parking.domain.models import (
    Vehicle, VehicleKind, VehicleCategory, FloorLayout, Slot, Floor,
    Ticket, UnparkResult, VehicleParkedEvent, VehicleLeftEvent
)


class TestVehicleKind(unittest.TestCase):
    """Unit tests for VehicleKind parsing"""

    def test_parse_is_case_insensitive(self):
        self.assertEqual(VehicleKind.parse("bike"), VehicleKind.BIKE)
        self.assertEqual(VehicleKind.parse("TRUCK"), VehicleKind.TRUCK)
        self.assertEqual(VehicleKind.parse(" Car "), VehicleKind.CAR)

    def test_parse_unknown_kind(self):
        self.assertIsNone(VehicleKind.parse("bus"))
        self.assertIsNone(VehicleKind.parse(""))

    def test_str_is_upper_case_name(self):
        self.assertEqual(str(VehicleKind.BIKE), "BIKE")


class TestVehicle(unittest.TestCase):
    """Unit tests for the Vehicle value object"""

    def test_value_equality(self):
        a = Vehicle(VehicleKind.CAR, "KA-01", "White")
        b = Vehicle(VehicleKind.CAR, "KA-01", "White")
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))

    def test_immutable(self):
        vehicle = Vehicle(VehicleKind.CAR, "KA-01", "White")
        with self.assertRaises(AttributeError):
            vehicle.color = "Black"

    def test_to_dict(self):
        vehicle = Vehicle(VehicleKind.TRUCK, "KA-09", "Blue")
        self.assertEqual(vehicle.to_dict(), {
            "kind": "truck",
            "registration_number": "KA-09",
            "color": "Blue",
        })


class TestFloorLayout(unittest.TestCase):
    """Unit tests for FloorLayout"""

    def test_default_layout(self):
        layout = FloorLayout()
        self.assertEqual(layout.categories(6), [
            VehicleCategory.LARGE,
            VehicleCategory.SMALL,
            VehicleCategory.SMALL,
            VehicleCategory.MEDIUM,
            VehicleCategory.MEDIUM,
            VehicleCategory.MEDIUM,
        ])

    def test_short_floors_follow_position_rule(self):
        layout = FloorLayout()
        self.assertEqual(layout.categories(0), [])
        self.assertEqual(layout.categories(1), [VehicleCategory.LARGE])
        self.assertEqual(layout.categories(2), [VehicleCategory.LARGE, VehicleCategory.SMALL])

    def test_custom_layout(self):
        layout = FloorLayout(large=2, small=0)
        self.assertEqual(layout.categories(3), [
            VehicleCategory.LARGE, VehicleCategory.LARGE, VehicleCategory.MEDIUM
        ])

    def test_negative_counts_rejected(self):
        with self.assertRaises(ValueError):
            FloorLayout(large=-1)
        with self.assertRaises(ValueError):
            FloorLayout(small=-2)

    def test_position_must_be_positive(self):
        with self.assertRaises(ValueError):
            FloorLayout().category_for_position(0)


class TestSlot(unittest.TestCase):
    """Unit tests for the Slot state machine"""

    def setUp(self):
        self.slot = Slot(4, VehicleCategory.MEDIUM)
        self.vehicle = Vehicle(VehicleKind.CAR, "KA-01", "White")

    def test_new_slot_is_free(self):
        self.assertTrue(self.slot.is_free)
        self.assertIsNone(self.slot.occupant)
        self.assertEqual(self.slot.number, 4)
        self.assertEqual(self.slot.category, VehicleCategory.MEDIUM)

    def test_park_then_unpark(self):
        self.assertTrue(self.slot.park(self.vehicle))
        self.assertFalse(self.slot.is_free)
        self.assertEqual(self.slot.occupant, self.vehicle)

        released = self.slot.unpark()
        self.assertEqual(released, self.vehicle)
        self.assertTrue(self.slot.is_free)

    def test_park_rejected_when_occupied(self):
        other = Vehicle(VehicleKind.CAR, "KA-02", "Red")
        self.slot.park(self.vehicle)

        self.assertFalse(self.slot.park(other))
        self.assertEqual(self.slot.occupant, self.vehicle)

    def test_unpark_free_slot_returns_none(self):
        self.assertIsNone(self.slot.unpark())
        self.assertTrue(self.slot.is_free)

    def test_slot_number_must_be_positive(self):
        with self.assertRaises(ValueError):
            Slot(0, VehicleCategory.SMALL)


class TestFloor(unittest.TestCase):
    """Unit tests for Floor"""

    def setUp(self):
        self.floor = Floor(1, 5)

    def test_layout_applied(self):
        categories = [s.category for s in self.floor.slots]
        self.assertEqual(categories, FloorLayout().categories(5))
        self.assertEqual([s.number for s in self.floor.slots], [1, 2, 3, 4, 5])
        self.assertEqual(len(self.floor), 5)

    def test_find_first_free_slot_by_category(self):
        slot = self.floor.find_first_free_slot(VehicleCategory.SMALL)
        self.assertEqual(slot.number, 2)

        slot.park(Vehicle(VehicleKind.BIKE, "B-1", "Red"))
        self.assertEqual(self.floor.find_first_free_slot(VehicleCategory.SMALL).number, 3)

    def test_find_first_free_slot_none_left(self):
        self.floor.get_slot(1).park(Vehicle(VehicleKind.TRUCK, "T-1", "Grey"))
        self.assertIsNone(self.floor.find_first_free_slot(VehicleCategory.LARGE))

    def test_free_and_occupied_slot_numbers(self):
        self.floor.get_slot(5).park(Vehicle(VehicleKind.CAR, "C-1", "Black"))

        self.assertEqual(self.floor.free_slot_numbers(VehicleCategory.MEDIUM), [4])
        self.assertEqual(self.floor.occupied_slot_numbers(VehicleCategory.MEDIUM), [5])
        self.assertEqual(self.floor.slot_numbers(VehicleCategory.MEDIUM), [4, 5])

    def test_get_slot_out_of_range(self):
        self.assertIsNone(self.floor.get_slot(0))
        self.assertIsNone(self.floor.get_slot(6))
        self.assertEqual(self.floor.get_slot(5).number, 5)

    def test_slots_property_is_a_copy(self):
        self.floor.slots.clear()
        self.assertEqual(len(self.floor), 5)

    def test_invalid_construction(self):
        with self.assertRaises(ValueError):
            Floor(0, 4)
        with self.assertRaises(ValueError):
            Floor(1, -1)


class TestTicketAndEvents(unittest.TestCase):
    """Unit tests for tickets, unpark results and domain events"""

    def setUp(self):
        self.vehicle = Vehicle(VehicleKind.BIKE, "KA-02", "Red")
        self.ticket = Ticket("LOT1_1_2_KA-02", "LOT1", 1, 2, self.vehicle)

    def test_ticket_registration(self):
        self.assertEqual(self.ticket.registration_number, "KA-02")
        self.assertEqual(self.ticket.to_dict()["floor_number"], 1)

    def test_unpark_result_factories(self):
        self.assertFalse(UnparkResult.invalid().valid)
        released = UnparkResult.released(self.vehicle)
        self.assertTrue(released.valid)
        self.assertEqual(released.vehicle, self.vehicle)

    def test_event_payloads(self):
        parked = VehicleParkedEvent(self.ticket).to_dict()
        self.assertEqual(parked["event_type"], "vehicle.parked")
        self.assertEqual(parked["data"]["vehicle_kind"], "bike")
        self.assertEqual(parked["data"]["slot_number"], 2)

        left = VehicleLeftEvent(self.ticket).to_dict()
        self.assertEqual(left["event_type"], "vehicle.left")
        self.assertEqual(left["data"]["color"], "Red")


if __name__ == "__main__":
    unittest.main(verbosity=2)
