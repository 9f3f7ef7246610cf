import pytest

from app.ingestors.state_vectors import decode_state_vector, decode_states


def make_state(**overrides):
    state = [
        "abc123",  # icao24
        "JAL123  ",  # callsign padded to 8 chars
        "Japan",
        1714765198,  # time_position
        1714765200,  # last_contact
        139.78,  # longitude
        35.55,  # latitude
        3657.6,  # baro_altitude meters
        False,  # on_ground
        164.6,  # velocity m/s
        45.0,  # true_track
        2.0,  # vertical_rate m/s
        None,  # sensors
        3700.0,  # geo_altitude meters
        "2000",  # squawk
        False,  # spi
        0,  # position_source
        3,  # category
    ]
    positions = {
        "icao24": 0,
        "callsign": 1,
        "longitude": 5,
        "latitude": 6,
        "baro_altitude": 7,
        "on_ground": 8,
        "true_track": 10,
        "category": 17,
    }
    for name, value in overrides.items():
        state[positions[name]] = value
    return state


def test_decode_state_vector_maps_named_fields():
    record = decode_state_vector(make_state())

    assert record is not None
    assert record.id == "abc123"
    assert record.callsign == "JAL123"
    assert record.origin_country == "Japan"
    assert record.longitude == pytest.approx(139.78)
    assert record.latitude == pytest.approx(35.55)
    assert record.baro_altitude == pytest.approx(3657.6)
    assert record.on_ground is False
    assert record.velocity == pytest.approx(164.6)
    assert record.heading == 45.0
    assert record.vertical_rate == 2.0
    assert record.geo_altitude == 3700.0
    assert record.squawk == "2000"
    assert record.position_source == 0
    assert record.category == 3


@pytest.mark.parametrize(
    "overrides",
    [{"longitude": None}, {"latitude": None}, {"longitude": None, "latitude": None}],
)
def test_decode_state_vector_drops_states_without_position(overrides):
    assert decode_state_vector(make_state(**overrides)) is None


def test_decode_state_vector_defaults_heading_and_category():
    state = make_state(true_track=None)[:17]  # category omitted entirely

    record = decode_state_vector(state)

    assert record is not None
    assert record.heading == 0
    assert record.category == 0


def test_decode_state_vector_defaults_null_category():
    record = decode_state_vector(make_state(category=None))

    assert record is not None
    assert record.category == 0


def test_decode_state_vector_blank_callsign_becomes_none():
    record = decode_state_vector(make_state(callsign="        "))

    assert record is not None
    assert record.callsign is None


@pytest.mark.parametrize("state", [None, [], ["abc123", "X"], "abc123"])
def test_decode_state_vector_rejects_malformed_arrays(state):
    assert decode_state_vector(state) is None


def test_decode_states_filters_and_keeps_order():
    payload = {
        "time": 1714765200,
        "states": [
            make_state(icao24="aaa111"),
            make_state(icao24="bbb222", latitude=None),
            make_state(icao24="ccc333", on_ground=True),
        ],
    }

    records = decode_states(payload)

    assert [r.id for r in records] == ["aaa111", "ccc333"]
    assert records[1].on_ground is True


@pytest.mark.parametrize("payload", [{"time": 1, "states": None}, {"time": 1}, None])
def test_decode_states_handles_missing_states(payload):
    assert decode_states(payload) == []


def test_decode_state_vector_keeps_aircraft_with_fractional_numbers():
    state = make_state()
    state[3] = 1714765198.5  # time_position
    state[4] = 1714765200.25  # last_contact
    state[16] = 2.0  # position_source
    state[17] = 4.5  # category

    record = decode_state_vector(state)

    assert record is not None
    assert record.time_position == pytest.approx(1714765198.5)
    assert record.last_contact == pytest.approx(1714765200.25)
    assert record.position_source == 2
    assert record.category == pytest.approx(4.5)


def test_decode_state_vector_unreadable_pass_through_fields_become_none():
    state = make_state()
    state[3] = "soon"  # time_position
    state[9] = "fast"  # velocity
    state[12] = "r1"  # sensors
    state[14] = 7700  # squawk as a number
    state[16] = {"src": 0}  # position_source

    record = decode_state_vector(state)

    assert record is not None
    assert record.time_position is None
    assert record.velocity is None
    assert record.sensors is None
    assert record.squawk == "7700"
    assert record.position_source is None


@pytest.mark.parametrize(
    "payload",
    [{"time": 1, "states": 5}, {"time": 1, "states": "abc"}, {"time": 1, "states": {"a": 1}}],
)
def test_decode_states_treats_non_list_states_as_empty(payload):
    assert decode_states(payload) == []


def test_decode_states_skips_non_array_elements():
    payload = {"time": 1, "states": [5, None, make_state(icao24="ddd444")]}

    assert [r.id for r in decode_states(payload)] == ["ddd444"]
