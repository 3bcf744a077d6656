from evaluation.harness import run_evaluation_suite


def test_evaluation_scenarios_pass():
    results = run_evaluation_suite()
    assert results, "Expected evaluation scenarios to run"
    for result in results:
        assert result["passed"], f"Scenario {result['scenario']} failed checks: {result['checks']}"
        assert result["outfit_count"] >= 1


def test_failing_category_scenario_drops_only_shoes():
    results = {result["scenario"]: result for result in run_evaluation_suite()}
    response = results["failing_shoe_search"]["response"]
    categories = {product["category"] for outfit in response["outfits"] for product in outfit["products"]}
    assert "shoes" not in categories
    assert {"top", "outer", "bottom", "accessories"} <= categories
