"""🧰 Спільні утиліти та винятки songbot."""
