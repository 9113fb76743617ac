from challenge.datasets import (
    EXPANDED_CATEGORY,
    FEATURED_DATASETS,
    HIGH,
    LOW,
    MEDIUM,
    DatasetDescriptor,
    all_datasets,
    category_counts,
    category_icon,
    dataset_availability,
    search_datasets,
    suitable_pool,
)


def test_all_datasets_sorted_and_unique():
    ids = [d.id for d in all_datasets()]
    assert ids == sorted(ids)
    assert len(ids) == len(set(ids))


def test_first_category_wins():
    by_id = {d.id: d for d in all_datasets()}
    # listed under demographics and education
    assert by_id["literacy-rate-youth"].category == "Demographics & Society"


def test_uncategorised_indicators_are_expanded():
    by_id = {d.id: d for d in all_datasets()}
    assert by_id["net-migration"].category == EXPANDED_CATEGORY
    assert by_id["net-migration"].has_world_bank_data


def test_availability():
    assert dataset_availability("gdp-per-capita") == HIGH
    assert dataset_availability("coffee-consumption") == MEDIUM
    assert dataset_availability("land-area") == MEDIUM
    assert dataset_availability("literacy-rate-adult-female") == LOW


def test_suitable_pool_drops_low_tier():
    pool_ids = {d.id for d in suitable_pool()}
    assert "literacy-rate-adult-female" not in pool_ids
    assert "coffee-consumption" in pool_ids
    assert all(d.availability_tier in (HIGH, MEDIUM) for d in suitable_pool())


def test_suitable_pool_dedupes_and_keeps_order():
    descriptors = [
        DatasetDescriptor("b", "X", HIGH),
        DatasetDescriptor("a", "X", LOW),
        DatasetDescriptor("c", "X", MEDIUM),
        DatasetDescriptor("b", "Y", HIGH),
    ]
    assert [d.id for d in suitable_pool(descriptors)] == ["b", "c"]


def test_featured_are_all_suitable():
    pool_ids = {d.id for d in suitable_pool()}
    assert set(FEATURED_DATASETS) <= pool_ids
    assert len(FEATURED_DATASETS) == len(set(FEATURED_DATASETS))


def test_search_and_counts():
    found = search_datasets("GDP")
    assert found
    assert all("gdp" in d.id for d in found)

    counts = category_counts(all_datasets())
    assert sum(counts.values()) == len(all_datasets())
    assert counts["Culture & Lifestyle"] == 2


def test_category_icon():
    assert category_icon("Economy & Development") == "💰"
    assert category_icon("Nope") == "📊"
    assert category_icon(None) == "📊"
