"""Domain services: variants, images, totals, catalog queries, products and orders."""
