import json

from nft_folio.enrichment import PLACEHOLDER_IMAGE, enrich_and_sort_collections, load_display_config
from nft_folio.models import CollectionDisplay, CollectionGroup

from conftest import make_nft


def _group(slug, *nfts):
    return CollectionGroup(name=slug, slug=slug, nfts=list(nfts))


def test_sorted_by_priority_then_name():
    grouped = {
        "b-slug": _group("b-slug"),
        "a-slug": _group("a-slug"),
        "top": _group("top"),
    }
    display = {
        "b-slug": CollectionDisplay(display_name="beta"),
        "a-slug": CollectionDisplay(display_name="Alpha"),
        "top": CollectionDisplay(display_name="Zeta", priority=10),
    }

    result = enrich_and_sort_collections(grouped, display)

    assert [c.name for c in result] == ["Zeta", "Alpha", "beta"]
    assert [c.priority for c in result] == [10, 0, 0]


def test_unconfigured_collection_keeps_slug_and_zero_priority():
    result = enrich_and_sort_collections({"raw-slug": _group("raw-slug")})

    assert result[0].name == "raw-slug"
    assert result[0].slug == "raw-slug"
    assert result[0].priority == 0


def test_cover_prefers_configured_image():
    grouped = {"art": _group("art", make_nft(collection="art", image_url="https://img/1.png"))}
    display = {"art": CollectionDisplay(display_name="Art", cover_image="https://cover.png")}

    assert enrich_and_sort_collections(grouped, display)[0].cover_image == "https://cover.png"


def test_cover_falls_back_to_last_item_with_media():
    grouped = {
        "art": _group(
            "art",
            make_nft(identifier="1", collection="art", image_url="https://img/1.png"),
            make_nft(identifier="2", collection="art", image_url="https://img/2.png", display_image_url="https://img/2-500.png"),
            make_nft(identifier="3", collection="art"),
        )
    }

    assert enrich_and_sort_collections(grouped)[0].cover_image == "https://img/2-500.png"


def test_cover_placeholder_when_no_media():
    grouped = {"art": _group("art", make_nft(collection="art"))}

    assert enrich_and_sort_collections(grouped)[0].cover_image == PLACEHOLDER_IMAGE


def test_enrichment_keeps_items():
    nft = make_nft(collection="art")
    result = enrich_and_sort_collections({"art": _group("art", nft)})

    assert result[0].nfts == [nft]


def test_load_display_config(tmp_path):
    path = tmp_path / "collections.json"
    path.write_text(json.dumps({
        "glitch": {"display_name": "Glitch Cinema", "priority": 5},
        "misc": {"display_name": "Misc"},
    }))

    display = load_display_config(path)

    assert display["glitch"].priority == 5
    assert display["misc"].priority == 0
    assert display["misc"].cover_image is None


def test_load_display_config_missing_or_invalid(tmp_path):
    assert load_display_config(tmp_path / "absent.json") == {}
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    assert load_display_config(bad) == {}
