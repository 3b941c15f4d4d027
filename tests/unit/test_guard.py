from vpctag.visitor.guard import safe_visit


def test_safe_visit_without_handler_returns_unnamed_result():
    res = safe_visit([{"SubnetId": "subnet-1"}], None, "visit_subnets")

    assert res.handler_name is None
    assert res.error is None


def test_safe_visit_calls_handler_and_times_it():
    seen = []

    res = safe_visit(["a", "b"], seen.append, "visit_subnets")

    assert seen == [["a", "b"]]
    assert res.handler_name == "visit_subnets"
    assert res.error is None
    assert res.duration_ms >= 0.0


def test_safe_visit_captures_handler_error():
    def boom(_subject):
        raise ValueError("handler exploded")

    res = safe_visit([], boom, "visit_instances")

    assert res.handler_name == "visit_instances"
    assert isinstance(res.error, ValueError)
    assert res.duration_ms >= 0.0
    assert res.to_dict()["error"] == "handler exploded"
