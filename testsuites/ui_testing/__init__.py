"""StackDemo UI automation: framework, page objects, scenario data and tests."""
