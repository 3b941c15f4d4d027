from vpctag.pagination import with_all_pages


class _Pages:
    def __init__(self, pages):
        self.pages = list(pages)
        self.requests = []

    def __call__(self, **request):
        self.requests.append(dict(request))
        return self.pages[len(self.requests) - 1]


def test_with_all_pages_follows_cursor_until_exhausted():
    op = _Pages([
        {"Items": [1, 2], "NextToken": "a"},
        {"Items": [3], "NextToken": "b"},
        {"Items": [4]},
    ])

    items = with_all_pages(op, {"Filters": []}, "NextToken", "NextToken", lambda r: r.get("Items", []))

    assert items == [1, 2, 3, 4]
    assert op.requests == [
        {"Filters": []},
        {"Filters": [], "NextToken": "a"},
        {"Filters": [], "NextToken": "b"},
    ]


def test_with_all_pages_uses_different_request_and_response_cursor_names():
    op = _Pages([
        {"LoadBalancerDescriptions": ["lb-1"], "NextMarker": "m1"},
        {"LoadBalancerDescriptions": ["lb-2"]},
    ])

    items = with_all_pages(op, None, "NextMarker", "Marker", lambda r: r.get("LoadBalancerDescriptions", []))

    assert items == ["lb-1", "lb-2"]
    assert op.requests[1] == {"Marker": "m1"}


def test_with_all_pages_empty_token_ends_loop():
    op = _Pages([{"Items": [], "NextToken": ""}])

    assert with_all_pages(op, {}, "NextToken", "NextToken", lambda r: r.get("Items")) == []
    assert len(op.requests) == 1


def test_with_all_pages_does_not_mutate_options():
    options = {"MaxResults": 5}
    op = _Pages([{"Items": [1], "NextToken": "x"}, {"Items": [2]}])

    with_all_pages(op, options, "NextToken", "NextToken", lambda r: r["Items"])

    assert options == {"MaxResults": 5}
