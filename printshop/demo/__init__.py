from printshop.demo.seed import DEMO_SCENARIO_ID, seed_demo_data

__all__ = ["DEMO_SCENARIO_ID", "seed_demo_data"]
