from __future__ import annotations

from typing import List

from fastapi.testclient import TestClient
import pytest

from app.services.search.records import LocationRecord
from tests.factories.location_records import (
    bare_location,
    far_location,
    farmers_market,
    library,
    make_location,
    make_service,
    soup_kitchen,
    vrs_services,
)

SEARCH_URL = "/api/search"


def _names(response) -> List[str]:
    return [item["name"] for item in response.json()]


class TestKeywordSearch:
    @pytest.fixture(autouse=True)
    def _markets(self, corpus_records: List[LocationRecord]) -> None:
        corpus_records.extend(
            [farmers_market(1), farmers_market(2, name="Belmont Farmers Market 2")]
        )

    def test_returns_json_array(self, client: TestClient) -> None:
        response = client.get(SEARCH_URL, params={"keyword": "market", "per_page": 1})
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        assert _names(response) == ["Belmont Farmers Market"]

    def test_reports_total_count_independent_of_page_size(self, client: TestClient) -> None:
        response = client.get(SEARCH_URL, params={"keyword": "market", "per_page": 1})
        assert len(response.json()) == 1
        assert response.headers["X-Total-Count"] == "2"
        assert response.headers["X-Current-Page"] == "1"
        assert response.headers["X-Per-Page"] == "1"

    def test_is_a_paginated_resource(self, client: TestClient) -> None:
        response = client.get(SEARCH_URL, params={"keyword": "market", "per_page": 1, "page": 2})
        assert _names(response) == ["Belmont Farmers Market 2"]
        assert response.headers["X-Total-Count"] == "2"

    def test_link_header_points_to_neighbouring_pages(self, client: TestClient) -> None:
        response = client.get(SEARCH_URL, params={"keyword": "market", "per_page": 1})
        link = response.headers["Link"]
        assert 'rel="first"' in link
        assert 'rel="next"' in link
        assert 'rel="last"' in link
        assert 'rel="prev"' not in link
        assert "page=2" in link
        assert "keyword=market" in link

    def test_page_past_the_end_is_empty(self, client: TestClient) -> None:
        response = client.get(SEARCH_URL, params={"keyword": "market", "page": 5})
        assert response.status_code == 200
        assert response.json() == []
        assert response.headers["X-Total-Count"] == "2"


class TestValidation:
    @pytest.fixture(autouse=True)
    def _location(self, corpus_records: List[LocationRecord]) -> None:
        corpus_records.append(vrs_services())

    def test_invalid_radius(self, client: TestClient) -> None:
        response = client.get(SEARCH_URL, params={"location": "94403", "radius": "ads"})
        assert response.status_code == 400
        assert response.headers["content-type"] == "application/json"
        body = response.json()
        assert body["description"] == "Radius must be a Float between 0.1 and 50."
        assert body["code"] == "invalid_radius"

    @pytest.mark.parametrize("lat_lng", ["37.6856578-122.4138119", "Apple,Pear"])
    def test_invalid_lat_lng(self, client: TestClient, lat_lng: str) -> None:
        response = client.get(SEARCH_URL, params={"lat_lng": lat_lng})
        assert response.status_code == 400
        assert (
            response.json()["description"]
            == "lat_lng must be a comma-delimited lat,long pair of floats."
        )

    @pytest.mark.parametrize(
        "params",
        [
            {"lat_lng": "3_7,1_2"},
            {"lat_lng": "37.5,-122.3", "radius": "1_0"},
            {"per_page": "1_0"},
        ],
    )
    def test_digit_group_underscores_are_rejected(self, client: TestClient, params: dict) -> None:
        response = client.get(SEARCH_URL, params=params)
        assert response.status_code == 400

    def test_non_integer_page(self, client: TestClient) -> None:
        response = client.get(SEARCH_URL, params={"page": "two"})
        assert response.status_code == 400
        assert response.json()["description"] == "page must be an Integer."

    def test_no_parameters_is_not_an_error(self, client: TestClient) -> None:
        response = client.get(SEARCH_URL, params={"zoo": "far"})
        assert response.status_code == 200
        assert response.headers["X-Total-Count"] == "1"


class TestGeographicSearch:
    @pytest.mark.parametrize(
        ("location", "radius"), [("la honda, ca", "0.1"), ("san gregorio, ca", "50")]
    )
    def test_radius_at_range_bounds(
        self, client: TestClient, corpus_records: List[LocationRecord], location: str, radius: str
    ) -> None:
        corpus_records.append(farmers_market())
        response = client.get(SEARCH_URL, params={"location": location, "radius": radius})
        assert _names(response) == ["Belmont Farmers Market"]

    def test_radius_excludes_distant_location(
        self, client: TestClient, corpus_records: List[LocationRecord]
    ) -> None:
        corpus_records.append(farmers_market())
        response = client.get(SEARCH_URL, params={"location": "pescadero, ca", "radius": 5})
        assert response.json() == []

    @pytest.mark.parametrize("location", ["00000", "94403ab"])
    def test_unresolvable_location_returns_no_results(
        self, client: TestClient, corpus_records: List[LocationRecord], location: str
    ) -> None:
        corpus_records.append(farmers_market())
        response = client.get(SEARCH_URL, params={"location": location})
        assert response.status_code == 200
        assert response.json() == []

    def test_lat_lng_search(self, client: TestClient, corpus_records: List[LocationRecord]) -> None:
        corpus_records.extend([vrs_services(1), farmers_market(2)])
        response = client.get(
            SEARCH_URL, params={"lat_lng": "37.583939,-122.3715745", "radius": 5}
        )
        assert _names(response) == ["VRS Services"]
        assert response.json()[0]["distance"] == 0.0

    def test_sorts_by_distance_by_default(
        self, client: TestClient, corpus_records: List[LocationRecord]
    ) -> None:
        corpus_records.extend([vrs_services(1), library(2)])
        response = client.get(
            SEARCH_URL, params={"location": "1236 Broadway, Burlingame, CA 94010"}
        )
        assert _names(response) == ["VRS Services", "Library"]

    def test_keyword_and_location(
        self, client: TestClient, corpus_records: List[LocationRecord]
    ) -> None:
        corpus_records.extend([library(1), vrs_services(2)])
        response = client.get(SEARCH_URL, params={"keyword": "books", "location": "Burlingame"})
        assert response.headers["X-Total-Count"] == "1"
        assert _names(response) == ["Library"]


class TestKeywordMatching:
    def test_keyword_matching_one_location(
        self, client: TestClient, corpus_records: List[LocationRecord]
    ) -> None:
        corpus_records.extend([vrs_services(1), library(2)])
        assert len(client.get(SEARCH_URL, params={"keyword": "library"}).json()) == 1
        assert client.get(SEARCH_URL, params={"keyword": "blahab"}).json() == []

    def test_multiple_words_must_all_match(
        self, client: TestClient, corpus_records: List[LocationRecord]
    ) -> None:
        corpus_records.extend([library(1), vrs_services(2)])
        response = client.get(SEARCH_URL, params={"keyword": "library books jobs"})
        assert response.headers["X-Total-Count"] == "1"
        assert _names(response) == ["Library"]

    @pytest.mark.parametrize("keyword", ["service", "services"])
    def test_location_name(
        self, client: TestClient, corpus_records: List[LocationRecord], keyword: str
    ) -> None:
        corpus_records.append(vrs_services())
        assert _names(client.get(SEARCH_URL, params={"keyword": keyword})) == ["VRS Services"]

    @pytest.mark.parametrize("keyword", ["job", "jobs"])
    def test_location_description(
        self, client: TestClient, corpus_records: List[LocationRecord], keyword: str
    ) -> None:
        corpus_records.append(vrs_services())
        response = client.get(SEARCH_URL, params={"keyword": keyword})
        assert response.json()[0]["description"] == "Provides jobs training"

    @pytest.mark.parametrize("keyword", ["food stamp", "food stamps"])
    def test_organization_name(
        self, client: TestClient, corpus_records: List[LocationRecord], keyword: str
    ) -> None:
        corpus_records.append(library())
        response = client.get(SEARCH_URL, params={"keyword": keyword})
        assert response.json()[0]["organization"]["name"] == "Food Stamps"

    @pytest.mark.parametrize("keyword", ["pantry", "emergencies"])
    def test_service_keywords(
        self, client: TestClient, corpus_records: List[LocationRecord], keyword: str
    ) -> None:
        corpus_records.append(vrs_services(services=[make_service()]))
        assert _names(client.get(SEARCH_URL, params={"keyword": keyword})) == ["VRS Services"]

    @pytest.mark.parametrize(
        ("stored", "keyword"),
        [("potato", "potatoes"), ("potatoes", "potato"), ("potato", "potato")],
    )
    def test_o_plurals_match_both_ways(
        self,
        client: TestClient,
        corpus_records: List[LocationRecord],
        stored: str,
        keyword: str,
    ) -> None:
        corpus_records.append(
            make_location(1, "Harvest Hub", services=[make_service(keywords=[stored])])
        )
        response = client.get(SEARCH_URL, params={"keyword": keyword})
        assert response.headers["X-Total-Count"] == "1"
        assert _names(response) == ["Harvest Hub"]

    def test_language_filter(self, client: TestClient, corpus_records: List[LocationRecord]) -> None:
        corpus_records.extend([vrs_services(1), library(2)])
        response = client.get(SEARCH_URL, params={"keyword": "library", "language": "arabic"})
        assert _names(response) == ["Library"]


class TestCategories:
    def test_keyword_matching_category_name_is_boosted(
        self, client: TestClient, corpus_records: List[LocationRecord]
    ) -> None:
        corpus_records.extend(
            [
                far_location(1),
                farmers_market(2),
                vrs_services(3, services=[make_service(categories=["Food"])]),
            ]
        )
        response = client.get(SEARCH_URL, params={"keyword": "food"})
        assert response.headers["X-Total-Count"] == "3"
        assert _names(response)[0] == "VRS Services"

    def test_category_is_exact_and_case_sensitive(
        self, client: TestClient, corpus_records: List[LocationRecord]
    ) -> None:
        corpus_records.extend(
            [
                library(1),
                farmers_market(2),
                vrs_services(3, services=[make_service(categories=["Jobs"])]),
            ]
        )
        response = client.get(SEARCH_URL, params={"category": "Jobs"})
        assert response.headers["X-Total-Count"] == "1"
        assert _names(response) == ["VRS Services"]

        response = client.get(SEARCH_URL, params={"category": "jobs"})
        assert response.headers["X-Total-Count"] == "0"

    def test_category_and_keyword_return_unique_locations(
        self, client: TestClient, corpus_records: List[LocationRecord]
    ) -> None:
        corpus_records.extend(
            [
                library(1, services=[make_service(1, categories=["Jobs"])]),
                farmers_market(2, services=[make_service(2, categories=["Jobs"])]),
                vrs_services(3, services=[make_service(3, categories=["Jobs"])]),
            ]
        )
        response = client.get(SEARCH_URL, params={"category": "Jobs", "keyword": "jobs"})
        assert response.headers["X-Total-Count"] == "3"
        assert len({item["id"] for item in response.json()}) == 3


class TestOrgName:
    @pytest.fixture(autouse=True)
    def _locations(self, corpus_records: List[LocationRecord]) -> None:
        corpus_records.extend([library(1), vrs_services(2), soup_kitchen(3)])

    def test_single_word(self, client: TestClient) -> None:
        response = client.get(SEARCH_URL, params={"org_name": "stamps"})
        assert response.headers["X-Total-Count"] == "1"
        assert _names(response) == ["Library"]

    def test_all_terms_must_match(self, client: TestClient) -> None:
        # A literal "+" as in "?org_name=Food+Pantry" decodes to a space
        response = client.get(f"{SEARCH_URL}?org_name=Food+Pantry")
        assert response.headers["X-Total-Count"] == "1"
        assert _names(response) == ["Soup Kitchen"]

        response = client.get(SEARCH_URL, params={"org_name": "Food+Pantry"})
        assert _names(response) == ["Soup Kitchen"]


class TestDomainAndEmail:
    @pytest.mark.parametrize(
        ("url", "email", "domain"),
        [
            ("http://www.smchsa.org", "info@cfa.org", "smchsa.org"),
            ("http://smchsa.com", "hello@cfa.com", "smchsa.com"),
            ("http://www.smchealth.org/mcah", "org@mcah.org", "smchealth.org"),
            ("http://www.smchsa.org/portal/site/planning", "sanmateo@ca.us", "smchsa.org"),
            (
                "http://www.childsup-connect.ca.gov",
                "gov@childsup-connect.gov",
                "childsup-connect.ca.gov",
            ),
            ("http://www.prenatalto3.org", "info@rwc2020.org", "prenatalto3.org"),
        ],
    )
    def test_domain_from_url(
        self,
        client: TestClient,
        corpus_records: List[LocationRecord],
        url: str,
        email: str,
        domain: str,
    ) -> None:
        corpus_records.extend([bare_location(1, urls=[url]), bare_location(2, emails=[email])])
        response = client.get(f"{SEARCH_URL}?domain={domain}")
        assert response.headers["X-Total-Count"] == "1"

    def test_domain_in_url_and_email(
        self, client: TestClient, corpus_records: List[LocationRecord]
    ) -> None:
        corpus_records.extend(
            [
                bare_location(1, urls=["http://smchsa.org"]),
                bare_location(2, emails=["info@smchsa.org"]),
            ]
        )
        response = client.get(f"{SEARCH_URL}?domain=smchsa.org")
        assert response.headers["X-Total-Count"] == "2"

    @pytest.mark.parametrize(
        "domain",
        ["gmail.com", "aol.com", "hotmail.com", "yahoo.com", "sbcglobal.net", "info@sbcglobal.net"],
    )
    def test_webmail_domains_return_nothing(
        self, client: TestClient, corpus_records: List[LocationRecord], domain: str
    ) -> None:
        host = domain.split("@")[-1]
        corpus_records.append(bare_location(1, emails=[f"info@{host}"]))
        response = client.get(SEARCH_URL, params={"domain": domain})
        assert response.headers["X-Total-Count"] == "0"

    def test_email_with_only_domain_returns_nothing(
        self, client: TestClient, corpus_records: List[LocationRecord]
    ) -> None:
        corpus_records.append(bare_location(1, emails=["info@gmail.com"]))
        response = client.get(SEARCH_URL, params={"email": "gmail.com"})
        assert response.headers["X-Total-Count"] == "0"

    def test_email_matches_emails_or_admin(
        self, client: TestClient, corpus_records: List[LocationRecord]
    ) -> None:
        corpus_records.extend(
            [
                bare_location(1, emails=["moncef@smcgov.org"]),
                bare_location(2, admin_email="moncef@smcgov.org"),
            ]
        )
        response = client.get(SEARCH_URL, params={"email": "moncef@smcgov.org"})
        assert response.headers["X-Total-Count"] == "2"

        response = client.get(SEARCH_URL, params={"email": "moncef@gmail.com"})
        assert response.headers["X-Total-Count"] == "0"


def test_missing_fields_are_present_as_null_or_empty(
    client: TestClient, corpus_records: List[LocationRecord]
) -> None:
    corpus_records.append(make_location(1, "Belmont Farmers Market"))
    response = client.get(SEARCH_URL, params={"keyword": "belmont"})
    item = response.json()[0]
    for key in ("phones", "address", "urls", "emails", "latitude", "longitude", "services"):
        assert key in item
    assert item["address"] is None
    assert item["phones"] == []
    assert item["distance"] is None


def test_location_representation(client: TestClient, corpus_records: List[LocationRecord]) -> None:
    corpus_records.append(vrs_services(services=[make_service(categories=["Jobs"])]))
    item = client.get(SEARCH_URL).json()[0]
    assert item["organization"] == {"id": 1, "name": "Parent Agency"}
    assert item["address"]["street"] == "1800 Easton Drive"
    assert item["services"][0]["categories"] == ["Jobs"]
    assert item["services"][0]["keywords"][0] == "library"


def test_out_of_range_stored_coordinates_are_echoed(
    client: TestClient, corpus_records: List[LocationRecord]
) -> None:
    corpus_records.append(make_location(1, "Misplaced", latitude=95.0, longitude=190.0))
    response = client.get(SEARCH_URL)
    assert response.status_code == 200
    item = response.json()[0]
    assert item["latitude"] == 95.0
    assert item["longitude"] == 190.0


def test_out_of_range_stored_coordinates_do_not_break_geographic_search(
    client: TestClient, corpus_records: List[LocationRecord]
) -> None:
    corpus_records.extend(
        [make_location(1, "Misplaced", latitude=95.0, longitude=10.0), vrs_services(2)]
    )
    response = client.get(SEARCH_URL, params={"lat_lng": "37.583939,-122.3715745"})
    assert response.status_code == 200
    assert response.headers["X-Total-Count"] == "2"
    assert _names(response)[0] == "VRS Services"
