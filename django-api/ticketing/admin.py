from django.contrib import admin

from ticketing.models import Event, Holding, TicketCategory


class TicketCategoryInline(admin.TabularInline):
    model = TicketCategory
    extra = 0
    readonly_fields = ["position", "name", "price", "initial", "remaining"]
    can_delete = False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "date", "total_tickets", "remaining"]
    search_fields = ["name"]
    readonly_fields = ["authority", "total_tickets", "remaining", "created_at"]
    inlines = [TicketCategoryInline]


@admin.register(Holding)
class HoldingAdmin(admin.ModelAdmin):
    list_display = ["holder", "event", "category_name", "quantity"]
    list_filter = ["event"]
    search_fields = ["holder"]
    readonly_fields = ["holder", "event", "category_name", "quantity"]
