"""Top‑level package for the Income and Expense Tracker.

The primary modules are:

* ``ledger`` – running totals, monthly summaries and category breakdowns
* ``dates`` – month keys, day stamps and their display labels
* ``storage`` – JSON key/value persistence of the ledger
* ``visualization`` – functions that generate Plotly figures
* ``app`` – a Streamlit page that ties everything together

To run the tracker from the command line you can execute:

```bash
streamlit run expense_tracker/app.py
```

or use ``run_tracker.py`` in the project root.
"""

from . import dates  # noqa: F401  # re-exported for convenience
from . import ledger  # noqa: F401  # re-exported for convenience
from . import storage  # noqa: F401  # re-exported for convenience
from . import visualization  # noqa: F401  # re-exported for convenience

__all__ = ["dates", "ledger", "storage", "visualization"]

__version__ = "0.1.0"
