"""Release workflow trigger: dispatch, discover, validate and monitor GitHub Actions runs."""
