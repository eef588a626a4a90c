"""asset_scout.crawler: URL resolution, host matching, link extraction and the crawl engine."""
