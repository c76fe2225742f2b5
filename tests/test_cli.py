from __future__ import annotations

import json

from printshop.cli import main


def test_cli_seed_and_sales_report(clean_db, capsys):
    assert main(["seed"]) == 0
    seeded = json.loads(capsys.readouterr().out)
    assert seeded["seeded_now"] is True

    assert main(["report", "sales"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["report"] == "sales"
    assert report["summary"]["transaction_count"] == 5


def test_cli_cashflow_with_window(clean_db, capsys):
    main(["seed"])
    capsys.readouterr()

    assert main(["report", "cashflow", "--start", "1999-01-01", "--end", "1999-01-31"]) == 0
    assert json.loads(capsys.readouterr().out) == {"report": "cashflow", "data": []}
