# companies/admin.py

from django.contrib import admin

from companies.models import Company, CompanyMembership


class CompanyMembershipInline(admin.TabularInline):
    model = CompanyMembership
    extra = 0
    autocomplete_fields = ("user",)


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ("name", "industry", "created_by", "created_at")
    search_fields = ("name", "industry", "tax_id")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("name",)
    inlines = (CompanyMembershipInline,)


@admin.register(CompanyMembership)
class CompanyMembershipAdmin(admin.ModelAdmin):
    list_display = ("company", "user", "role", "created_at")
    list_filter = ("role",)
    search_fields = ("company__name", "user__email")
