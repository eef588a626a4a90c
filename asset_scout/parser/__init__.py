"""asset_scout.parser: Разбор HTML-документов."""
