"""GoMarketplace cart: line-item state, persistence and totals."""
