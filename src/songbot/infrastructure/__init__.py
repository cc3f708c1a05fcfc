"""🔌 Інфраструктурні адаптери: каталоги, рендер, аудіо."""
