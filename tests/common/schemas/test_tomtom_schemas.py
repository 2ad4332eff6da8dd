from src.common.schemas.tomtom import (
    CalculateRouteResponse,
    FlowSegmentData,
    FlowSegmentResponse,
    IncidentDetailsResponse,
    IncidentItem,
)

def test_flow_segment_reads_provider_names():
    response = FlowSegmentResponse.model_validate({"flowSegmentData": {
        "frc": "FRC1", "currentSpeed": 48, "freeFlowSpeed": 62.5, "confidence": 0.8,
    }})
    data = response.flow_segment_data

    assert data.current_speed == 48
    assert data.free_flow_speed == 62.5
    assert data.confidence == 0.8
    assert data.frc == "FRC1"

def test_flow_segment_non_numeric_fields_are_missing():
    data = FlowSegmentData.model_validate({
        "frc": 0, "currentSpeed": "55", "freeFlowSpeed": True, "confidence": float("nan"),
    })

    assert data.frc is None
    assert data.current_speed is None
    assert data.free_flow_speed is None
    assert data.confidence is None

def test_flow_segment_absent():
    assert FlowSegmentResponse.model_validate({}).flow_segment_data is None

def test_route_first_leg_points():
    response = CalculateRouteResponse.model_validate({"routes": [{"legs": [
        {"points": [{"latitude": 39.8, "longitude": -105.0}, {"latitude": 39.6, "longitude": -104.9}]},
        {"points": [{"latitude": 0.0, "longitude": 0.0}]},
    ]}]})

    assert response.first_leg_points() == [(39.8, -105.0), (39.6, -104.9)]

def test_route_without_legs():
    assert CalculateRouteResponse.model_validate({"routes": []}).first_leg_points() is None
    assert CalculateRouteResponse.model_validate({"routes": [{"legs": []}]}).first_leg_points() is None

def test_incident_item_tolerates_bad_shapes():
    item = IncidentItem.model_validate({"properties": "oops", "geometry": {"type": 3}})

    assert item.properties.road_numbers == []
    assert item.geometry.type == ""
    assert item.geometry.coordinates is None

def test_incident_road_numbers_are_text():
    item = IncidentItem.model_validate({"properties": {"roadNumbers": ["I25", 70, None]}})
    assert item.properties.road_numbers == ["I25", "70"]

def test_incident_details_non_list():
    assert IncidentDetailsResponse.model_validate({"incidents": {"a": 1}}).incidents == []
