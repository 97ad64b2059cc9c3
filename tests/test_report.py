from datetime import date

from stay_within.calculator import Config, analyze_trips, calculate_status
from stay_within.report import build_json_document, render_status, render_text_report
from stay_within.trips import Trip


TRIPS = [Trip(date(2023, 5, 25), date(2023, 8, 10)), Trip(date(2023, 9, 15), date(2023, 9, 20), "Paris")]


def _report(config):
    return analyze_trips(TRIPS, config), calculate_status(TRIPS, config)


class TestJsonDocument:
    def test_shape_and_values(self):
        config = Config(evaluation_date=date(2024, 1, 1))
        rows, status = _report(config)
        doc = build_json_document(rows, status, config)

        assert list(doc) == ["config", "trips", "status"]
        assert doc["config"] == {"windowMonths": 12, "absenceLimit": 180}
        assert doc["trips"] == [
            {"start": "25.05.2023", "end": "10.08.2023", "days": 78, "daysInWindow": 78, "daysRemaining": 102},
            {"start": "15.09.2023", "end": "20.09.2023", "days": 6, "daysInWindow": 84, "daysRemaining": 96},
        ]
        assert doc["status"] == {
            "targetDate": "01.01.2024",
            "lastTripEnd": "20.09.2023",
            "daysSinceLastTrip": 103,
            "windowStart": "01.01.2023",
            "windowEnd": "01.01.2024",
            "totalDaysOutside": 84,
            "daysRemaining": 96,
            "status": "ok",
        }

    def test_status_key_order(self):
        config = Config(evaluation_date=date(2024, 1, 1))
        doc = build_json_document(*_report(config), config)
        assert list(doc["status"]) == [
            "targetDate",
            "lastTripEnd",
            "daysSinceLastTrip",
            "windowStart",
            "windowEnd",
            "totalDaysOutside",
            "daysRemaining",
            "status",
        ]


class TestTextReport:
    def test_estimated_heading_and_rows(self):
        config = Config(evaluation_date=date(2024, 1, 1))
        text = render_text_report(*_report(config), config)
        assert "Rolling 12-Month Window Analysis" in text
        assert "ESTIMATED STATUS - As of 01.01.2024" in text
        assert "15.09.2023   | 20.09.2023   |      6 |                   84 |           96  Paris" in text
        assert "Rolling 12-month window: 01.01.2023 to 01.01.2024" in text
        assert "You are within the 180-day limit." in text

    def test_current_heading_without_custom_date(self):
        config = Config()
        status = calculate_status(TRIPS, config, today=date(2024, 1, 1))
        lines = render_status(status, config)
        assert "CURRENT STATUS - As of Today" in lines
        assert "Today's date: 01.01.2024" in lines

    def test_exceeded_warnings(self):
        trips = [Trip(date(2023, 1, 1), date(2023, 6, 30))]
        config = Config(evaluation_date=date(2023, 6, 30))
        text = render_text_report(analyze_trips(trips, config), calculate_status(trips, config), config)
        assert "WARNING: Exceeded 180-day limit by 1 days!" in text
        assert "WARNING: You have EXCEEDED the 180-day limit by 1 days!" in text

    def test_caution_message(self):
        trips = [Trip(date(2023, 1, 1), date(2023, 6, 3))]
        config = Config(evaluation_date=date(2023, 6, 30))
        lines = render_status(calculate_status(trips, config), config)
        assert "CAUTION: You have less than 27 days remaining in your allowance." in lines
