"""🏭 Доменний шар songbot."""
