"""Data seeding CLI commands."""

from datetime import date

import click
from flask.cli import with_appcontext

from causeway.extensions import db
from causeway.models import Category, Page, PublishStatus, Resource, ResourceType, User, UserRole
from causeway.services.publishing import initial_status

DEMO_CATEGORIES = [
    {'name_en': 'Banking Regulations', 'name_ar': 'اللوائح المصرفية', 'slug': 'banking-regulations', 'color': '#1e40af', 'sort_order': 1},
    {'name_en': 'Fintech & Innovation', 'name_ar': 'التكنولوجيا المالية والابتكار', 'slug': 'fintech-innovation', 'color': '#7c3aed', 'sort_order': 2},
    {'name_en': 'Risk & Compliance', 'name_ar': 'المخاطر والامتثال', 'slug': 'risk-compliance', 'color': '#dc2626', 'sort_order': 3},
    {'name_en': 'ESG & Sustainability', 'name_ar': 'الاستدامة البيئية والاجتماعية', 'slug': 'esg-sustainability', 'color': '#16a34a', 'sort_order': 4},
    {'name_en': 'Digital Payments', 'name_ar': 'المدفوعات الرقمية', 'slug': 'digital-payments', 'color': '#ea580c', 'sort_order': 5},
    {'name_en': 'Corporate Governance', 'name_ar': 'حوكمة الشركات', 'slug': 'corporate-governance', 'color': '#0891b2', 'sort_order': 6},
]

# category is a DEMO_CATEGORIES slug
DEMO_RESOURCES = [
    {
        'slug': 'open-banking-gcc-2024',
        'title_en': 'The State of Open Banking in the GCC',
        'title_ar': 'حالة الخدمات المصرفية المفتوحة في دول مجلس التعاون الخليجي',
        'description_en': 'A comprehensive analysis of open banking frameworks, regulatory developments, and adoption rates across Gulf Cooperation Council countries.',
        'description_ar': 'تحليل شامل لأطر الخدمات المصرفية المفتوحة والتطورات التنظيمية ومعدلات التبني في دول مجلس التعاون الخليجي.',
        'type': ResourceType.REPORT,
        'status': PublishStatus.PUBLISHED,
        'featured': True,
        'priority': 10,
        'publisher': 'CauseWay Research',
        'tags': ['open-banking', 'gcc', 'regulation'],
        'category': 'banking-regulations',
        'meta_title_en': 'Open Banking in GCC - CauseWay Report 2024',
        'meta_desc_en': 'Comprehensive report on open banking frameworks and adoption in GCC countries.',
        'meta_title_ar': 'الخدمات المصرفية المفتوحة في الخليج - تقرير كوزواي 2024',
        'meta_desc_ar': 'تقرير شامل عن أطر الخدمات المصرفية المفتوحة والتبني في دول الخليج.',
    },
    {
        'slug': 'esg-financial-services-mena',
        'title_en': 'ESG Integration in MENA Financial Services',
        'title_ar': 'دمج معايير ESG في الخدمات المالية بمنطقة الشرق الأوسط وشمال أفريقيا',
        'description_en': 'How financial institutions in the Middle East are incorporating environmental, social, and governance principles.',
        'description_ar': 'كيف تدمج المؤسسات المالية في الشرق الأوسط المبادئ البيئية والاجتماعية والحوكمة.',
        'type': ResourceType.WHITEPAPER,
        'status': PublishStatus.PUBLISHED,
        'featured': True,
        'priority': 8,
        'publisher': 'CauseWay Advisory',
        'tags': ['esg', 'sustainability', 'mena'],
        'category': 'esg-sustainability',
    },
    {
        'slug': 'digital-transformation-trends-2024',
        'title_en': 'Digital Transformation Trends for Financial Institutions 2024',
        'title_ar': 'اتجاهات التحول الرقمي للمؤسسات المالية 2024',
        'description_en': 'Key technology trends shaping the financial services industry, including AI, blockchain, and cloud adoption.',
        'type': ResourceType.ARTICLE,
        'status': PublishStatus.PUBLISHED,
        'priority': 5,
        'publisher': 'CauseWay Insights',
        'tags': ['digital-transformation', 'fintech', 'ai'],
        'category': 'fintech-innovation',
    },
    {
        'slug': 'risk-management-framework-guide',
        'title_en': 'Risk Management Framework Guide for Banks',
        'title_ar': 'دليل إطار إدارة المخاطر للبنوك',
        'description_en': 'A practical guide to establishing and maintaining a comprehensive risk management framework for banking institutions.',
        'type': ResourceType.GUIDE,
        'status': PublishStatus.PUBLISHED,
        'priority': 4,
        'publisher': 'CauseWay Advisory',
        'tags': ['risk-management', 'banking', 'compliance'],
        'category': 'risk-compliance',
    },
    {
        'slug': 'payment-innovations-saudi-vision-2030',
        'title_en': 'Payment Innovations Aligned with Saudi Vision 2030',
        'title_ar': 'ابتكارات الدفع المتوافقة مع رؤية السعودية 2030',
        'description_en': 'An exploration of how payment technology is evolving in Saudi Arabia to support Vision 2030 goals.',
        'type': ResourceType.PRESENTATION,
        'status': PublishStatus.DRAFT,
        'priority': 3,
        'publisher': 'CauseWay Research',
        'tags': ['payments', 'saudi', 'vision-2030'],
        'category': 'digital-payments',
    },
    {
        'slug': 'governance-best-practices-family-offices',
        'title_en': 'Corporate Governance Best Practices for Family Offices',
        'title_ar': 'أفضل ممارسات حوكمة الشركات للمكاتب العائلية',
        'description_en': 'Guidelines and recommendations for establishing governance structures in family offices across the MENA region.',
        'type': ResourceType.REPORT,
        'status': PublishStatus.PUBLISHED,
        'priority': 6,
        'publisher': 'CauseWay Governance',
        'tags': ['governance', 'family-office', 'mena'],
        'category': 'corporate-governance',
    },
]

DEMO_PAGES = [
    {
        'slug': 'about',
        'title_en': 'About CauseWay',
        'title_ar': 'عن كوزواي',
        'status': PublishStatus.PUBLISHED,
        'show_in_nav': True,
        'sort_order': 1,
        'meta_title_en': 'About CauseWay Financial Consulting',
        'meta_desc_en': 'Learn about CauseWay Financial Consulting - bridging financial expertise across the MENA region.',
        'meta_title_ar': 'عن كوزواي للاستشارات المالية',
        'meta_desc_ar': 'تعرف على كوزواي للاستشارات المالية - جسر الخبرة المالية عبر منطقة الشرق الأوسط وشمال أفريقيا.',
    },
    {
        'slug': 'services',
        'title_en': 'Our Services',
        'title_ar': 'خدماتنا',
        'status': PublishStatus.PUBLISHED,
        'show_in_nav': True,
        'sort_order': 2,
        'meta_title_en': 'Financial Consulting Services - CauseWay',
        'meta_desc_en': 'Comprehensive financial consulting solutions for banking and financial institutions.',
    },
]


@click.group('seed')
def seed_commands():
    """Data seeding commands."""
    pass


def _ensure_user(email, name, role, password):
    user = db.session.query(User).filter_by(email=email).first()
    if user:
        return user, False
    user = User(email=email, name=name, role=role)
    user.set_password(password)
    db.session.add(user)
    db.session.flush()
    return user, True


@seed_commands.command('demo')
@click.option('--create-tables', is_flag=True, help='Create missing tables first (development only)')
@click.option('--admin-password', default='admin123', show_default=True, help='Password for the demo admin')
@click.option('--editor-password', default='editor123', show_default=True, help='Password for the demo editor')
@with_appcontext
def seed_demo(create_tables, admin_password, editor_password):
    """Seed demo users, categories, resources and pages.

    Existing rows (matched by email or slug) are left untouched, so the
    command can be run repeatedly.

    Example:
        flask seed demo --create-tables
    """
    try:
        if create_tables:
            db.create_all()

        admin, created = _ensure_user('admin@causewaygrp.com', 'Admin User', UserRole.ADMIN, admin_password)
        click.echo(f"Admin user: {admin.email}{'' if created else ' (exists)'}")
        editor, created = _ensure_user('editor@causewaygrp.com', 'Editor User', UserRole.EDITOR, editor_password)
        click.echo(f"Editor user: {editor.email}{'' if created else ' (exists)'}")

        categories = {}
        for spec in DEMO_CATEGORIES:
            category = db.session.query(Category).filter_by(slug=spec['slug']).first()
            if category is None:
                category = Category(enabled=True, **spec)
                db.session.add(category)
                db.session.flush()
            categories[category.slug] = category
        click.echo(f'Categories: {len(categories)}')

        created_resources = 0
        for spec in DEMO_RESOURCES:
            if db.session.query(Resource).filter_by(slug=spec['slug']).first():
                continue
            fields = dict(spec)
            status = fields.pop('status')
            category = categories[fields.pop('category')]
            resource = Resource(
                **fields,
                category_id=category.id,
                publish_date=date.today(),
                year=date.today().year,
                created_by_id=admin.id,
                updated_by_id=admin.id,
            )
            initial_status(resource, status)
            db.session.add(resource)
            created_resources += 1
        click.echo(f'Resources created: {created_resources}')

        created_pages = 0
        for spec in DEMO_PAGES:
            if db.session.query(Page).filter_by(slug=spec['slug']).first():
                continue
            fields = dict(spec)
            status = fields.pop('status')
            page = Page(**fields, template='default', blocks_en=[], blocks_ar=[])
            initial_status(page, status)
            db.session.add(page)
            created_pages += 1
        click.echo(f'Pages created: {created_pages}')

        db.session.commit()
        click.echo(click.style('Seed complete!', fg='green'))
    except Exception as e:
        db.session.rollback()
        click.echo(click.style(f'Error seeding demo data: {e}', fg='red'))
        raise
